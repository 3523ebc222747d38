from __future__ import annotations

import json
from argparse import ArgumentParser, Namespace
from collections.abc import Callable, Sequence

from diamond_gateway.chains import known_chains
from diamond_gateway.commands import (
    run_brand_info,
    run_encode_membership_change,
    run_fetch_metadata,
    run_list_chains,
    run_list_proposals,
    run_membership_info,
    run_resolve_uri,
    run_show_chain,
    run_show_proposal,
)
from diamond_gateway.config import AppSettings, get_settings
from diamond_gateway.observability.logging import configure_logging
from diamond_gateway.types import CommandResult, CommandStatus

CommandHandler = Callable[[Namespace, AppSettings], CommandResult]

COMMAND_HANDLERS: dict[str, CommandHandler] = {
    "list-chains": run_list_chains,
    "show-chain": run_show_chain,
    "list-proposals": run_list_proposals,
    "show-proposal": run_show_proposal,
    "membership-info": run_membership_info,
    "brand-info": run_brand_info,
    "fetch-metadata": run_fetch_metadata,
    "resolve-uri": run_resolve_uri,
    "encode-membership-change": run_encode_membership_change,
}


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="diamond-gateway", description="Diamond DAO gateway CLI")
    parser.add_argument("--json", action="store_true", help="emit machine-readable JSON output")
    parser.add_argument(
        "--chain",
        default=None,
        help=f"chain profile ({', '.join(known_chains())}); unknown names fall back to local",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-chains")
    subparsers.add_parser("show-chain")

    list_proposals = subparsers.add_parser("list-proposals")
    list_proposals.add_argument("--limit", type=int, default=None)

    show_proposal = subparsers.add_parser("show-proposal")
    show_proposal.add_argument("--proposal-id", required=True, type=int)
    show_proposal.add_argument("--with-metadata", action="store_true")

    membership = subparsers.add_parser("membership-info")
    membership.add_argument("--owner", default="")

    brand = subparsers.add_parser("brand-info")
    brand.add_argument("--with-metadata", action="store_true")

    fetch = subparsers.add_parser("fetch-metadata")
    fetch.add_argument("--uri", required=True)

    resolve = subparsers.add_parser("resolve-uri")
    resolve.add_argument("--uri", required=True)

    encode = subparsers.add_parser("encode-membership-change")
    encode.add_argument("--max-supply", type=int, default=None)
    encode.add_argument("--mint-price", default=None, help="mint price in native units, e.g. 0.05")

    return parser


def _emit_result(result: CommandResult, *, as_json: bool) -> None:
    if as_json:
        print(result.to_json())
        return

    print(f"{result.command}: {result.status.value}")
    if result.details:
        print(json.dumps(result.details, indent=2, sort_keys=True, default=str))


def entrypoint(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    settings = get_settings()
    configure_logging(settings.log_level)

    handler = COMMAND_HANDLERS[str(args.command)]
    result = handler(args, settings)
    _emit_result(result, as_json=bool(args.json))
    return 1 if result.status == CommandStatus.FAILED else 0


if __name__ == "__main__":
    raise SystemExit(entrypoint())
