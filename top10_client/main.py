from __future__ import annotations

import argparse
import asyncio
import logging

from .config import ENV_KEYS, Config, resolve_endpoint
from .list_client import ListClient, build_url
from .models import Pending, Query, Success
from .report import render_text, write_json
from .session import ListSession


__version__ = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="top10")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = p.add_subparsers(dest="cmd", required=False)

    p_config = sub.add_parser("config", help="Config commands")
    sub_config = p_config.add_subparsers(dest="config_cmd", required=True)

    sub_config.add_parser("keys", help="List environment keys")
    sub_config.add_parser("show", help="Show the resolved endpoint and timeout")

    p_resolve = sub.add_parser("resolve", help="Print the backend base URL for an environment")
    p_resolve.add_argument("--override", default=None, help="Explicit API base")
    p_resolve.add_argument("--host", default="", help="Hostname the client is served from")

    p_gen = sub.add_parser("generate", help="Generate a top 10 list for a product category")
    p_gen.add_argument("prompt", help="Product category (e.g. 'gaming laptops')")
    p_gen.add_argument("--email", default="", help="Send the results to this address")
    p_gen.add_argument("--api-base", default=None, help="Override TOP10_API_BASE")
    p_gen.add_argument("--host", default=None, help="Override TOP10_HOST")
    p_gen.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    p_gen.add_argument("--json", dest="json_path", default=None, help="Also write the result as JSON")

    return p


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if args.version:
        print(__version__)
        return 0

    if args.cmd is None:
        p.print_help()
        return 0

    if args.cmd == "config":
        if args.config_cmd == "keys":
            for k in ENV_KEYS:
                print(k)
            return 0

        if args.config_cmd == "show":
            cfg = Config.load_from_env()
            print(f"endpoint: {cfg.endpoint}")
            print(f"url:      {build_url(cfg.endpoint)}")
            print(f"timeout:  {cfg.timeout_s:g}s")
            return 0

    if args.cmd == "resolve":
        print(resolve_endpoint(args.override, args.host))
        return 0

    if args.cmd == "generate":
        if args.timeout is not None and args.timeout <= 0:
            p.error("--timeout must be a positive number of seconds")
        return _run_generate(args)

    raise RuntimeError("unreachable")


def _run_generate(args) -> int:
    cfg = Config.load_from_env()
    api_base = args.api_base if args.api_base is not None else cfg.api_base
    host = args.host if args.host is not None else cfg.host
    timeout_s = args.timeout if args.timeout is not None else cfg.timeout_s

    client = ListClient(endpoint=resolve_endpoint(api_base, host), timeout_s=timeout_s)
    session = ListSession(client)

    if not Query.build(args.prompt).is_submittable:
        print("Nothing to do: enter a product category.")
        return 2

    print(render_text(Pending()))
    asyncio.run(session.submit(args.prompt, args.email))

    print(render_text(session.state, email_sent=session.email_sent))

    if args.json_path:
        path = write_json(session.state, args.json_path)
        print(f"\nResult written to {path}")

    return 0 if isinstance(session.state, Success) else 1


if __name__ == "__main__":
    raise SystemExit(main())
