from blinker import Namespace
from flask import current_app

_signals = Namespace()

# sent with the path whose cached views are stale
path_revalidated = _signals.signal("path-revalidated")


def revalidate(path: str | None):
    if not path:
        return
    current_app.logger.debug("revalidate %s", path)
    try:
        path_revalidated.send(current_app._get_current_object(), path=path)
    except Exception:
        # the mutation is already committed
        current_app.logger.exception("revalidate receiver failed for %s", path)
