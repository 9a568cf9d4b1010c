# ==============================================
# TOPIC 4: PERSISTENCE (Database across restarts)
# ==============================================
#
# This package handles the on-disk database file and the
# in-process reference to the currently loaded Store.
#
# Modules:
# --------
# - database_file.py  → read / write / stat the database file
# - holder.py         → StoreHolder, atomic replace on refresh
#
# ==============================================

from .database_file import DatabaseFile
from .holder import StoreHolder

__all__ = [
    "DatabaseFile",
    "StoreHolder",
]
