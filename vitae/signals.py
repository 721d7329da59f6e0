"""Render lifecycle signals.

``rendered`` fires after every full render of either engine (sender is the
engine, ``page`` is "cv" or "portfolio", ``lang`` the active language).
``lang_changed`` fires only from the CV engine's language toggle.
Subscribers should connect with ``sender=engine`` to stay scoped to one page.
"""

from blinker import Namespace

_signals = Namespace()

rendered = _signals.signal("rendered")
lang_changed = _signals.signal("lang-changed")
