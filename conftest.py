"""Root conftest so the ``src`` package resolves when pytest runs from the repo root."""
