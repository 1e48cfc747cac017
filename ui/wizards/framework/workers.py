# -*- coding: utf-8 -*-
"""
Background execution of persistence jobs.

A dispatcher runs a job (a callable with no arguments) and hands its return
value to a callback on the dispatcher's own thread:

- ThreadDispatcher: one QThread per job; results arrive through a queued
  signal so callbacks always run on the GUI thread.
- ImmediateDispatcher: runs the job inline (headless use and tests).
"""

from typing import Any, Callable, Dict, Optional

from PyQt5.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from utils.logger import get_logger

logger = get_logger(__name__)

ResultCallback = Callable[[Any], None]
ErrorCallback = Callable[[Exception], None]


class PersistenceWorker(QThread):
    """Background worker for one save/submit round trip."""

    result_ready = pyqtSignal(object)
    failed = pyqtSignal(object)  # Exception

    def __init__(self, job: Callable[[], Any], parent=None):
        super().__init__(parent)
        self.job = job

    def run(self):
        """Run the job in background."""
        try:
            result = self.job()
        except Exception as e:
            logger.error(f"Persistence job failed: {e}", exc_info=True)
            self.failed.emit(e)
            return
        self.result_ready.emit(result)


class ThreadDispatcher(QObject):
    """Runs each job on its own PersistenceWorker."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._callbacks: Dict[PersistenceWorker, tuple] = {}

    def dispatch(self, job: Callable[[], Any], on_result: ResultCallback,
                 on_error: Optional[ErrorCallback] = None):
        worker = PersistenceWorker(job)
        self._callbacks[worker] = (on_result, on_error)
        worker.result_ready.connect(self._on_result)
        worker.failed.connect(self._on_failed)
        worker.finished.connect(self._on_worker_finished)
        worker.start()
        logger.debug(f"Dispatched persistence job ({len(self._callbacks)} running)")

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def wait_all(self, msecs: int = 30000) -> bool:
        """Block until every running worker has finished (application shutdown)."""
        return all(worker.wait(msecs) for worker in list(self._callbacks))

    @pyqtSlot(object)
    def _on_result(self, result):
        on_result, _ = self._callbacks.get(self.sender(), (None, None))
        if on_result is not None:
            on_result(result)

    @pyqtSlot(object)
    def _on_failed(self, error):
        _, on_error = self._callbacks.get(self.sender(), (None, None))
        if on_error is not None:
            on_error(error)

    @pyqtSlot()
    def _on_worker_finished(self):
        worker = self.sender()
        self._callbacks.pop(worker, None)
        worker.deleteLater()


class ImmediateDispatcher:
    """
    Runs jobs synchronously.

    A failing job goes to on_error like a PersistenceWorker failure; without
    an on_error the exception propagates to the caller.
    """

    pending = 0

    def dispatch(self, job: Callable[[], Any], on_result: ResultCallback,
                 on_error: Optional[ErrorCallback] = None):
        try:
            result = job()
        except Exception as e:
            if on_error is None:
                raise
            on_error(e)
            return
        on_result(result)
