"""
Entry point for the mortgage repayment calculator.

Usage:
    python main.py          # launches the web app at localhost:5000
    python main.py --cli    # runs the terminal interface
"""

import argparse

import config as cfg


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Mortgage Repayment Calculator",
    )
    parser.add_argument(
        "--cli",
        action="store_true",
        help="Run in terminal mode instead of launching the web app",
    )
    parser.add_argument("--host", default=cfg.WEB_HOST, help="Web server host")
    parser.add_argument("--port", type=int, default=cfg.WEB_PORT, help="Web server port")
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Do not open a browser window when the web app starts",
    )
    args = parser.parse_args()

    if args.cli:
        from cli import run_cli
        run_cli()
    else:
        from app import run_web
        run_web(host=args.host, port=args.port, open_browser=not args.no_browser)


if __name__ == "__main__":
    main()
