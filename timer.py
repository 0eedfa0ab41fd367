from datetime import datetime

from loggers.main_logger import main_logger as logger


class Timer:
    def __init__(self):
        self.start_time = None
        self.end_time = None

    def start(self, start_message=None):
        if start_message:
            logger.info(start_message)
        self.start_time = datetime.now()
        self.end_time = None

    def stop(self, stop_message=None):
        if stop_message:
            logger.info(stop_message)
        self.end_time = datetime.now()

    def elapsed(self, elapsed_message):
        if self.start_time is None:
            return "Timer has not been started."
        if self.end_time is None:
            return "Timer has not been stopped."
        elapsed_time = self.end_time - self.start_time
        return f"{elapsed_message} {elapsed_time}"
