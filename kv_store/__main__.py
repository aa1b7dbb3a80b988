"""Allow python -m kv_store (same entrypoint as the kv-store console script)."""
from __future__ import annotations

from kv_store.cli.main import main

if __name__ == "__main__":
    raise SystemExit(main())
