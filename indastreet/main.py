"""Entry point for the IndaStreet Textual app."""

from __future__ import annotations

from indastreet.logs import init_logging
from indastreet.market_app import MarketApp


def main() -> None:
    """Run the Textual application."""
    init_logging()
    MarketApp().run()


if __name__ == "__main__":
    main()
