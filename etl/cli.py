import argparse
import logging
import os
import sys

from common.errors import ChainParserError
from common.logging_setup import setup_logging
from common.settings import load_settings
from etl.load import records_to_json, write_records
from etl.pipeline import BlockchainParser
from ingestion.contract import ContractBinding
from ingestion.fetcher import ChainReader

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Extract transaction records from a block or a single transaction")
    target = p.add_mutually_exclusive_group(required=True)
    target.add_argument("--block", type=int, help="Block number to parse")
    target.add_argument("--tx", help="Transaction hash to parse (0x + 64 hex)")
    p.add_argument("--config", default=None,
                   help="YAML config (default: config.yaml when present)")
    p.add_argument("--rpc-url", dest="rpc_url", default=None, help="JSON-RPC endpoint, overrides config")
    p.add_argument("--abi", default=None, help="Contract ABI JSON file, overrides config")
    p.add_argument("--contract", default=None, help="Contract address, overrides config")
    p.add_argument("--out", default=None, help="Write the JSON array to this file instead of stdout")
    p.add_argument("--indent", type=int, default=None, help="Pretty-print JSON with this indent")
    p.add_argument("--log-level", dest="log_level", default=None,
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def _settings_from_args(args):
    path = args.config
    if path is None and os.path.exists("config.yaml"):
        path = "config.yaml"
    overrides = {
        "rpc": {"url": args.rpc_url or os.environ.get("RPC_URL")},
        "contract": {"abi_path": args.abi, "address": args.contract},
        "output": {"path": args.out, "indent": args.indent},
        "logging": {"level": args.log_level},
    }
    return load_settings(path, overrides=overrides)


def run(args) -> int:
    try:
        st = _settings_from_args(args)
    except RuntimeError as e:
        print(f"ERROR {e}", file=sys.stderr)
        return 1
    setup_logging(st.logging.level)

    try:
        contract = ContractBinding.load(st.contract.abi_path, st.contract.address)
        log.info("contract %s: %d functions, %d events", contract.address,
                 len(contract.function_names()), len(contract.event_names()))
        parser = BlockchainParser(ChainReader(st.rpc.url, timeout=st.rpc.timeout), contract)
        if args.tx is not None:
            records = [parser.parse_tx(args.tx)]
        else:
            records = parser.parse_block(args.block)
    except (ChainParserError, ValueError) as e:
        print(f"ERROR {e}", file=sys.stderr)
        return 1

    if st.output.path:
        try:
            n = write_records(records, st.output.path, indent=st.output.indent)
        except OSError as e:
            print(f"ERROR cannot write {st.output.path}: {e}", file=sys.stderr)
            return 1
        print(f"Wrote {n} records to {st.output.path}")
    else:
        print(records_to_json(records, indent=st.output.indent))
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
