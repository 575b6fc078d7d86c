#!/usr/bin/env python3
import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional

from .utils.call_encoder import ArgumentValue, CallEncoder, FunctionSignature
from .utils.config_manager import UpgradeConfig, load_config
from .utils.exceptions import UpgradeParamsError
from .utils.logging import setup_logging

LOG = logging.getLogger(__name__)

# No ETH is sent along with the upgrade
PAYABLE_AMOUNT = "0"

INITIALIZE_SIGNATURE = FunctionSignature("initialize", ("address",))


@dataclass(frozen=True)
class UpgradeParams:
    """Arguments for the proxy upgradeToAndCall invocation"""
    payable_amount: str
    new_implementation: str
    data: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "payableAmount": self.payable_amount,
            "newImplementation": self.new_implementation,
            "data": self.data
        }

    def lines(self) -> List[str]:
        return [f"{key}: {value}" for key, value in self.to_dict().items()]


def encode_initialize_call(token_address: str) -> str:
    """Encode initialize(address) for the given token address"""
    call = CallEncoder.encode(INITIALIZE_SIGNATURE, [ArgumentValue.address(token_address)])
    return call.hex()


def build_upgrade_params(config: UpgradeConfig) -> UpgradeParams:
    return UpgradeParams(
        payable_amount=PAYABLE_AMOUNT,
        new_implementation=config.new_implementation,
        data=encode_initialize_call(config.initializer_arg)
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution flow"""
    parser = argparse.ArgumentParser(description="Compute proxy upgrade parameters")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level")
    parser.add_argument("--log-file", default=None,
                        help="Path to log file")

    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)

    try:
        config = load_config()
        params = build_upgrade_params(config)
    except UpgradeParamsError as e:
        LOG.debug("Upgrade parameter generation failed", exc_info=True)
        print(f"Error generating upgrade parameters: {e}", file=sys.stderr)
        return 1

    LOG.info("=== Upgrade Parameters ===")
    for line in params.lines():
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
