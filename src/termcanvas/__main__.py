"""``python -m termcanvas``: the same surface as the ``termcanvas`` script."""

from termcanvas.cli import run

if __name__ == "__main__":
    raise SystemExit(run())
