"""Entry point for ``python -m salesreport``."""

from salesreport.cli import app

if __name__ == "__main__":
    app(prog_name="salesreport")
