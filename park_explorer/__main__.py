"""Module entry point: python -m park_explorer ..."""

from __future__ import annotations

from park_explorer.main import main


if __name__ == "__main__":
    raise SystemExit(main())
