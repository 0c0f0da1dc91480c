from PySide6.QtCore import QObject, QThread, Signal, Slot

from streamBox import controller
from streamBox.storage import kv_db
from streamBox.utils import log_debug

# ───────────────────────── Worker skeletons ───────────────────────────────
class _LoadWorker(QObject):
    """Runs one controller load, reporting per-movie progress."""
    progress = Signal(int, int)
    message  = Signal(str)
    loaded   = Signal(object)
    finished = Signal(bool)

    @Slot()
    def run(self):
        kv_db.attach_thread()
        try:
            self.loaded.emit(self._run())
            self.finished.emit(True)
        except Exception as e:
            log_debug(f"{self.__class__.__name__} error: {e}")
            self.finished.emit(False)

    def _report(self, done: int, total: int, label: str) -> None:
        self.message.emit(label)
        self.progress.emit(done, total)

    def _run(self):
        raise NotImplementedError


class _FavoritesWorker(_LoadWorker):

    def _run(self):
        self.progress.emit(0, 0)                              # busy until first movie
        return controller.load_favorites(progress=self._report)


class _RatedMoviesWorker(_LoadWorker):

    def __init__(self, query: str = "", sort_by: str = "recent"):
        super().__init__()
        self.query = query
        self.sort_by = sort_by

    def _run(self):
        self.progress.emit(0, 0)
        return controller.load_rated_movies(self.query, self.sort_by, progress=self._report)


# ───────────────────────── thread plumbing ────────────────────────────────
def start_worker(worker: _LoadWorker) -> QThread:
    """Move *worker* onto its own QThread and start it. Returns the thread."""
    thr = QThread()
    worker.moveToThread(thr)

    worker.finished.connect(thr.quit)
    worker.finished.connect(worker.deleteLater)
    thr.finished.connect(thr.deleteLater)

    thr.started.connect(worker.run)
    thr.start()
    return thr
