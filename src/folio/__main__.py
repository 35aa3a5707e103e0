"""Allow running as ``python -m folio``."""

from folio.cli.main import app

if __name__ == "__main__":
    app()
