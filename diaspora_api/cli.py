"""
Command-line interface for the diaspora* pod client.

Provides argument parsing and one handler per sub-command.
"""

import argparse
import sys

from diaspora_api.client import DiasporaClient
from diaspora_api.config import (
    DEFAULT_CA_BUNDLE,
    DEFAULT_PASSWORD,
    DEFAULT_POD,
    DEFAULT_PROVIDER,
    DEFAULT_USER,
    REQUEST_TIMEOUT,
)
from diaspora_api.logging_setup import _setup_logging, log
from diaspora_api.pods import fetch_pod_list


def parse_args(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="diaspora-api",
        description="Talk to a diaspora* pod: log in, post, delete, list aspects and services.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Pod, user and password can also be provided via the DIASPORA_POD,\n"
            "DIASPORA_USERNAME and DIASPORA_PASSWORD env vars. If the password\n"
            "is not supplied and not in the environment, you will be prompted for it."
        ),
    )
    parser.add_argument(
        "--pod", default=DEFAULT_POD,
        help="Pod domain, e.g. pod.example.org (default: $DIASPORA_POD)",
    )
    parser.add_argument(
        "--user", default=DEFAULT_USER,
        help="diaspora* username (default: $DIASPORA_USERNAME)",
    )
    parser.add_argument(
        "--password", default=DEFAULT_PASSWORD,
        help="diaspora* password (overrides DIASPORA_PASSWORD env var)",
    )
    parser.add_argument(
        "--insecure-http", dest="secure", action="store_false", default=True,
        help="Talk plain http instead of https",
    )
    parser.add_argument(
        "--ca-bundle", default=DEFAULT_CA_BUNDLE,
        help="PEM bundle to verify the pod certificate against",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification (use for self-signed certs)",
    )
    parser.add_argument(
        "--timeout", type=float, default=REQUEST_TIMEOUT,
        help=f"Per-request timeout in seconds (default: {REQUEST_TIMEOUT})",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("check", help="Initialise and log in, then report the result")

    for name in ("aspects", "services"):
        p = sub.add_parser(name, help=f"List your {name}")
        p.add_argument("--refresh", action="store_true", help="Bypass the cached list")

    p_post = sub.add_parser("post", help="Publish a status message")
    p_post.add_argument("text", help="Message text (markdown)")
    p_post.add_argument(
        "--aspects", default="public",
        help="Comma-separated aspect ids, or 'public' (default)",
    )
    p_post.add_argument(
        "--provider", default=DEFAULT_PROVIDER,
        help=f"Provider name shown under the post (default: {DEFAULT_PROVIDER})",
    )

    p_delete = sub.add_parser("delete", help="Delete one of your posts or comments")
    p_delete.add_argument("kind", choices=["post", "comment"])
    p_delete.add_argument("id")

    sub.add_parser("pods", help="List public pods from the pod directory")

    return parser.parse_args(argv)


def _fail(client: DiasporaClient) -> int:
    error = client.last_error
    if error is not None:
        log.error("%s", error)
        server_message = error.data.get("server_message")
        if server_message:
            log.error("Pod said: %s", server_message)
    else:
        log.error("Operation failed.")
    return 1


def _connect(args: argparse.Namespace) -> DiasporaClient | None:
    if not args.pod:
        log.error("No pod given (use --pod or DIASPORA_POD).")
        return None
    if not args.user:
        log.error("No username given (use --user or DIASPORA_USERNAME).")
        return None
    if not args.password:
        import getpass
        args.password = getpass.getpass("diaspora* password: ")

    return DiasporaClient(
        args.pod,
        args.secure,
        provider=getattr(args, "provider", DEFAULT_PROVIDER),
        timeout=args.timeout,
        verify_ssl=args.verify_ssl,
        ca_bundle=args.ca_bundle,
    )


def run(args: argparse.Namespace) -> int:
    if args.command == "pods":
        pods = fetch_pod_list(timeout=args.timeout)
        for pod in pods:
            scheme = "https" if str(pod["secure"]).lower() in ("true", "1", "yes") else "http"
            print(f"{pod['domain']}\t{scheme}")
        return 0 if pods else 1

    client = _connect(args)
    if client is None:
        return 1

    with client:
        if not client.init() or not client.login(args.user, args.password):
            return _fail(client)

        if args.command == "check":
            log.info("Connected to %s as %s.", client.get_pod_url(), args.user)
            return 0

        if args.command in ("aspects", "services"):
            getter = client.get_aspects if args.command == "aspects" else client.get_services
            items = getter(force=args.refresh)
            if items is None:
                return _fail(client)
            for key, name in items.items():
                print(f"{key}\t{name}")
            return 0

        if args.command == "post":
            result = client.post(args.text, args.aspects)
            if result is None:
                return _fail(client)
            print(result["permalink"])
            return 0

        if args.command == "delete":
            if not client.delete(args.kind, args.id):
                return _fail(client)
            log.info("Deleted %s %s.", args.kind, args.id)
            return 0

    return 1


def main(argv=None) -> None:
    """
    Main entry point for the diaspora-api CLI.
    """
    args = parse_args(argv)

    _setup_logging(debug=args.debug)

    if not args.verify_ssl:
        import urllib3
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED (--no-verify-ssl)")

    sys.exit(run(args))


if __name__ == "__main__":
    main()
