"""
gui
~~~
Qt worker objects for loads that fan out into one catalog call per movie.

•  No direct storage or HTTP here – everything goes through `controller`.
"""

from streamBox.gui.workers import (
    _FavoritesWorker as FavoritesWorker,
    _RatedMoviesWorker as RatedMoviesWorker,
    start_worker,
)

__all__ = ["FavoritesWorker", "RatedMoviesWorker", "start_worker"]
