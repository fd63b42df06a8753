import logging

from concurrent.futures import ThreadPoolExecutor
from threading import Condition, Lock


logger = logging.getLogger(__name__)


class TaskGroup:
    '''
    Scoped group of tasks running on a thread pool.

    Tasks may spawn further tasks in the same group. Leaving the context
    waits until every task spawned so far, and every task they spawned in
    turn, has finished. The first exception raised by a task is kept and
    re-raised on exit; later tasks are skipped once an error is recorded.

    e.g.::

        >>> with TaskGroup() as tg:
        ...     tg.spawn(fn, arg)
    '''
    def __init__(self, max_workers=None):
        self._executor = ThreadPoolExecutor(
                max_workers=max_workers, thread_name_prefix='rdfxml')
        self._pending = 0
        self._done = Condition(Lock())
        self._error = None
        self._error_lock = Lock()


    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.join()
        self._executor.shutdown(wait=True)
        if exc is None and self._error is not None:
            raise self._error


    @property
    def error(self):
        '''
        First exception raised by a task, or None.
        '''
        return self._error


    def set_error(self, err):
        '''
        Record an error unless one was already recorded.

        :rtype: bool
        :return: Whether this error was the one recorded.
        '''
        with self._error_lock:
            if self._error is not None:
                return False
            self._error = err

        return True


    def spawn(self, fn, *args, **kwargs):
        '''
        Schedule a task in the group.
        '''
        with self._done:
            self._pending += 1
        self._executor.submit(self._run, fn, args, kwargs)


    def join(self):
        '''
        Wait until no task is pending.
        '''
        with self._done:
            while self._pending:
                self._done.wait()


    def _run(self, fn, args, kwargs):
        try:
            if self._error is None:
                fn(*args, **kwargs)
        except Exception as e:
            if self.set_error(e):
                logger.debug(f'Task {fn.__name__} failed: {e}')
        finally:
            with self._done:
                self._pending -= 1
                if not self._pending:
                    self._done.notify_all()
