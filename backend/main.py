"""Xenon Advisor entry point: socket server by default, console with --console."""

import argparse
import logging

from settings import APP_NAME, BUILD_ID, load_settings


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="[%(asctime)s] %(levelname)s - %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=f"{APP_NAME} ({BUILD_ID})")
    parser.add_argument("--host", default=None, help="listen address (XENON_HOST)")
    parser.add_argument("--port", type=int, default=None, help="listen port (XENON_PORT, default 2847)")
    parser.add_argument("--console", action="store_true", help="run the line-based console instead")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(host=args.host, port=args.port)
    _configure_logging(settings.log_level)
    logger = logging.getLogger("xenon")

    if args.console:
        from console import run_console
        from response_bank import engine_for

        run_console(engine=engine_for(settings))
        return 0

    from server import AdvisorServer

    server = AdvisorServer(settings)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("interrupted, shutting down")
    finally:
        server.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
