"""Session store — saved conversations in LMDB.

Each conversation is kept under its name in the "sessions" sub-database.
LMDB values are msgpack-encoded Eliza.snapshot() dicts:

    {"version": 1, "script": sha1, "limit": 1-4,
     "memories": [remark, ...], "cursors": [[keyword, index, position], ...]}

A snapshot only restores onto a session running the same script.
"""

import logging

import lmdb
import msgpack

log = logging.getLogger(__name__)


class SessionStore:
    """Named Eliza snapshots in an LMDB environment."""

    def __init__(self, lmdb_path, map_size=10 * 1024 * 1024):
        self.env = lmdb.open(str(lmdb_path), map_size=map_size, max_dbs=2)
        self.sessions_db = self.env.open_db(b"sessions")   # name -> snapshot

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def save(self, name, eliza):
        """Store the current state of an Eliza session under name."""
        snapshot = eliza.snapshot()
        with self.env.begin(write=True) as txn:
            txn.put(
                name.encode("utf-8"),
                msgpack.packb(snapshot),
                db=self.sessions_db
            )
        log.debug("Saved session %s (%d memories)", name, len(snapshot["memories"]))

    def delete(self, name):
        """Remove a saved session. Returns True if it existed."""
        with self.env.begin(write=True) as txn:
            return txn.delete(name.encode("utf-8"), db=self.sessions_db)

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def load(self, name):
        """Read a saved snapshot. Returns dict or None."""
        with self.env.begin(db=self.sessions_db) as txn:
            val = txn.get(name.encode("utf-8"))
            if val is None:
                return None
            return msgpack.unpackb(val)

    def restore(self, name, eliza):
        """Continue the saved conversation name in eliza.

        Returns False if nothing is saved under name. Raises ValueError if
        the snapshot was taken with a different script.
        """
        snapshot = self.load(name)
        if snapshot is None:
            return False
        eliza.restore(snapshot)
        log.debug("Restored session %s (counter %d)", name, snapshot["limit"])
        return True

    def names(self):
        """Names of all saved sessions, sorted."""
        with self.env.begin(db=self.sessions_db) as txn:
            return [key.decode("utf-8") for key, _ in txn.cursor()]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self):
        """Close LMDB environment."""
        self.env.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
