from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, AppConfig, ConfigError, load_config
from ..logging.init import log_summary, setup_logging
from ..normalize.classify import classify
from ..normalize.columns import resolve_columns
from ..notion.client import UpstreamError
from ..notion.parser import parse_pages
from ..services.profile import build_client, load_profile
from ..services.summary import render_summary_body

"""CLI entrypoint.

Commands:
- fetch:   run one fetch-normalize cycle and print the content JSON
- inspect: print each row's resolved column roles and classification
- serve:   serve /api/profile and /api/photos over HTTP

Exit codes: 0 success, 1 configuration error, 2 upstream error.
"""

EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_UPSTREAM_ERROR = 2


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env values into the environment.

    Existing environment variables win unless override=True, so deployment
    secrets are never shadowed by a stray local file.
    """
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="profile-content", description="Homepage content from a Notion database")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config path (optional file)")
    p.add_argument("--env-file", type=Path, default=Path(".env"), help="dotenv file with NOTION_* secrets")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command")

    fetch = sub.add_parser("fetch", help="Print normalized content as JSON")
    fetch.add_argument("--indent", type=int, default=2)
    fetch.add_argument("--output", type=Path, default=None, help="Write JSON here instead of stdout")

    sub.add_parser("inspect", help="Show column roles and classification per row")

    serve = sub.add_parser("serve", help="Serve the content API over HTTP")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    return p.parse_args(argv)


def _fetch(cfg: AppConfig, indent: int, output: Path | None = None) -> int:
    result = load_profile(cfg)
    text = json.dumps(result.content.to_dict(), ensure_ascii=False, indent=indent)
    if output is not None:
        output.write_text(text + "\n", encoding="utf-8")
    else:
        print(text)
    log_summary(render_summary_body(result.report))
    return EXIT_SUCCESS


def _inspect(cfg: AppConfig) -> int:
    rows = parse_pages(build_client(cfg).query_database())
    if not rows:
        print("inspect: no rows")
        return EXIT_SUCCESS
    for row in rows:
        roles = resolve_columns(row.properties.keys())
        kind = classify(row.properties.get(roles.tag) if roles.tag else None)
        types = {name: cell.type.value for name, cell in row.properties.items()}
        print(f"ROW: {row.row_id} columns={types}")
        print(f"  roles={roles.as_dict()} project={kind.is_project} talk={kind.is_talk}")
    return EXIT_SUCCESS


def _serve(cfg: AppConfig, host: str | None, port: int | None, logger) -> int:
    from ..server.handler import make_server

    cfg.require_credentials()
    server = make_server(cfg, host, port)
    bound_host, bound_port = server.server_address[:2]
    logger.info(f"serving on http://{bound_host}:{bound_port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:  # pragma: no cover
        logger.info("shutting down")
    finally:
        server.server_close()
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    # None only: an empty list must not pick up pytest's own argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    if args.debug:
        logger.debug("debug mode enabled")

    _load_env_file(args.env_file)
    try:
        cfg = load_config(args.config)
        command = args.command or "fetch"
        if command == "inspect":
            return _inspect(cfg)
        if command == "serve":
            return _serve(cfg, args.host, args.port, logger)
        return _fetch(cfg, getattr(args, "indent", 2), getattr(args, "output", None))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_CONFIG_ERROR
    except UpstreamError as e:
        logger.error(f"upstream: {e}")
        return EXIT_UPSTREAM_ERROR


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
