import logging
import threading
import queue
from typing import Optional

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'


class BackgroundLogger:
    """Queues log records from request threads and writes them from a daemon thread."""

    def __init__(self, log_file: Optional[str] = None, level=logging.INFO, name: str = "lunchweb"):
        self.log_queue = queue.Queue()
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        # one handler per logger name, even when several apps are created
        if not self.logger.handlers:
            handler = logging.FileHandler(log_file) if log_file else logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(handler)
        self._stop_event = threading.Event()
        self.thread = threading.Thread(target=self._process_logs, name=f"{name}-log", daemon=True)
        self.thread.start()

    def _process_logs(self):
        while not (self._stop_event.is_set() and self.log_queue.empty()):
            try:
                level, message = self.log_queue.get(timeout=0.5)
            except queue.Empty:
                continue
            self.logger.log(level, message)
            self.log_queue.task_done()

    def log(self, level, message):
        self.log_queue.put((level, message))

    def info(self, message):
        self.log(logging.INFO, message)

    def warning(self, message):
        self.log(logging.WARNING, message)

    def error(self, message):
        self.log(logging.ERROR, message)

    def flush(self):
        """Blocks until every queued record has been written."""
        self.log_queue.join()

    def stop(self):
        self._stop_event.set()
        self.thread.join()
