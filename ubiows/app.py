import argparse
from pathlib import Path

from . import __version__
from .config import Settings, load_env
from .errors import UbioError
from .logger import get_logger
from .parsers import parse as parse_document
from .parsers import supported_formats as parser_formats
from .redirect import decide
from .serializers import SERIALIZERS, serialize
from .service import SUPPORTED_FORMATS, RequestParams, UbioService
from .transport import HttpTransport

OUTPUT_FORMATS = sorted(SERIALIZERS)


def build_service(args: argparse.Namespace) -> UbioService:
    settings = Settings.from_env()
    if getattr(args, "api_key", None):
        settings.api_key = args.api_key
    if getattr(args, "workers", None):
        settings.max_workers = args.workers
    if getattr(args, "degrade", False):
        settings.on_enrichment_error = "degrade"
    logger = get_logger(
        level=settings.log_level,
        log_dir=settings.log_dir,
        enable_file=not args.no_log_file,
    )
    transport = HttpTransport(
        logger,
        timeout=settings.timeout,
        max_retries=settings.max_retries,
        base_delay=settings.retry_base_delay,
    )
    return UbioService(settings, transport, logger)


def cmd_lookup(args: argparse.Namespace) -> None:
    service = build_service(args)
    try:
        result = service.get_record(args.guid)
    except UbioError as e:
        raise SystemExit(str(e))
    print(serialize(result, args.format), end="")
    if args.metrics:
        service.logger.log_metrics_summary()


def cmd_query(args: argparse.Namespace) -> None:
    service = build_service(args)
    try:
        result = service.get_query_result(args.query)
    except UbioError as e:
        raise SystemExit(str(e))
    print(serialize(result, args.format), end="")
    if args.metrics:
        service.logger.log_metrics_summary()


def cmd_redirect(args: argparse.Namespace) -> None:
    try:
        url = decide(args.format, args.query, args.path)
    except UbioError as e:
        raise SystemExit(str(e))
    print(url or "No redirect")


def cmd_request(args: argparse.Namespace) -> None:
    service = build_service(args)
    response = service.handle_request(
        RequestParams(path=args.path, format=args.format, query=args.query, guid=args.guid)
    )
    print(f"Status: {response.status}")
    for name, value in response.headers.items():
        print(f"{name}: {value}")
    if response.body:
        print()
        print(response.body, end="")
    if response.status >= 400:
        raise SystemExit(1)


def cmd_parse(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    try:
        result = parse_document(input_path.read_bytes(), args.format)
    except UbioError as e:
        raise SystemExit(str(e))
    missing = result.undeclared_prefixes()
    if missing:
        print(f"[warn] undeclared namespace prefixes: {', '.join(missing)}")
    print(serialize(result, args.output), end="")


def cmd_formats(args: argparse.Namespace) -> None:
    print("Service formats: " + ", ".join(SUPPORTED_FORMATS))
    print("Input formats: " + ", ".join(parser_formats()))


def _add_remote_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--format", default="json", choices=OUTPUT_FORMATS, help="Output format (default: json)")
    p.add_argument("--metrics", action="store_true", help="Log a metrics summary when done")
    p.add_argument("--no-log-file", action="store_true", help="Only log to the console")


def main():
    # Load .env if present (UBIO_KEYCODE, UBIOWS_URL, etc.)
    load_env()
    parser = argparse.ArgumentParser(prog="ubiows", description="PhyloWS wrapper for uBio namebank records")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    lkp = subparsers.add_parser("lookup", help="Fetch one namebank record by GUID or LSID")
    lkp.add_argument("guid", help="Anything ending in a namebank id, e.g. urn:lsid:ubio.org:namebank:2481730")
    _add_remote_options(lkp)
    lkp.set_defaults(func=cmd_lookup)

    qry = subparsers.add_parser("query", help="Run a namebank search and enrich every match")
    qry.add_argument("query", help="Search term, e.g. \"Homo sapiens\"")
    qry.add_argument("--api-key", help="uBio keyCode (or set UBIO_KEYCODE)")
    qry.add_argument("--workers", type=int, help="Parallel record lookups (default: UBIOWS_MAX_WORKERS or 1)")
    qry.add_argument("--degrade", action="store_true", help="Keep search-only data when a record lookup fails")
    _add_remote_options(qry)
    qry.set_defaults(func=cmd_query)

    red = subparsers.add_parser("redirect", help="Show where a request would be redirected")
    red.add_argument("--path", default="", help="Request path, e.g. /phylows/ubio/2481730")
    red.add_argument("--query", help="Query string value")
    red.add_argument("--format", default="html", help="Requested format (default: html)")
    red.set_defaults(func=cmd_redirect)

    req = subparsers.add_parser("request", help="Serve one request as the web service would")
    req.add_argument("--path", default="", help="Request path")
    req.add_argument("--query", help="Query string value")
    req.add_argument("--guid", help="Record GUID (defaults to the path)")
    req.add_argument("--format", help="Requested format (default: nexml)")
    req.add_argument("--api-key", help="uBio keyCode (or set UBIO_KEYCODE)")
    req.add_argument("--no-log-file", action="store_true", help="Only log to the console")
    req.set_defaults(func=cmd_request)

    prs = subparsers.add_parser("parse", help="Parse a saved authority document")
    prs.add_argument("--input", required=True, help="Path to the document")
    prs.add_argument("--format", required=True, choices=parser_formats(), help="Document format")
    prs.add_argument("--output", default="json", choices=OUTPUT_FORMATS, help="Output format (default: json)")
    prs.set_defaults(func=cmd_parse)

    fmt = subparsers.add_parser("formats", help="List supported formats")
    fmt.set_defaults(func=cmd_formats)

    args = parser.parse_args()

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
