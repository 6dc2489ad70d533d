"""Console entrypoint for the ``spin-player`` script."""
from __future__ import annotations


def main() -> int:
    # Importing app loads config and builds the player services.
    import app

    app.launch()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
