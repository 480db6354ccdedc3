#!/usr/bin/env python3
"""
Supermarket Checkout CLI
Build a catalogue, scan items and print the receipt with applied promotions.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from colorama import init, Fore, Style

from checkout.config import CheckoutConfig
from checkout.errors import CheckoutError, ConfigError, UnknownItemError
from checkout.rules import Catalogue, build_catalogue, load_catalogue
from checkout.engine import Checkout
from checkout.runner import ScanPolicy, run_checkout
from checkout.summary import CheckoutSummary, summarize

init()  # Initialize colorama for Windows

class CLIColors:
    """Color utilities for CLI output"""

    @staticmethod
    def success(text: str) -> str:
        return f"{Fore.GREEN}{text}{Style.RESET_ALL}"

    @staticmethod
    def error(text: str) -> str:
        return f"{Fore.RED}{text}{Style.RESET_ALL}"

    @staticmethod
    def warning(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}"

    @staticmethod
    def info(text: str) -> str:
        return f"{Fore.CYAN}{text}{Style.RESET_ALL}"

    @staticmethod
    def highlight(text: str) -> str:
        return f"{Fore.MAGENTA}{Style.BRIGHT}{text}{Style.RESET_ALL}"

class CheckoutCLI:
    """Main CLI class for the checkout calculator"""

    def __init__(self, config: Optional[CheckoutConfig] = None):
        self.config = config or CheckoutConfig.from_env()
        logging.basicConfig(level=self.config.log_level)

    def _load(self, catalogue_path: Optional[str]) -> Catalogue:
        path = Path(catalogue_path) if catalogue_path else self.config.catalogue_path
        if path is None:
            raise ConfigError("no catalogue given: pass --catalogue or set CHECKOUT_CATALOGUE")
        return load_catalogue(path)

    def show_catalogue(self, catalogue_path: Optional[str] = None) -> bool:
        """Print every pricing rule in the catalogue"""
        try:
            catalogue = self._load(catalogue_path)
        except ConfigError as e:
            print(CLIColors.error(f"❌ {e}"))
            return False

        if not catalogue:
            print(CLIColors.warning("⚠️  Catalogue is empty."))
            return True
        print(CLIColors.highlight("\nProduct Catalogue:"))
        print("------------------")
        for sku, rule in catalogue.items():
            line = f"{sku}: {rule.unit_price} each"
            if rule.bulk:
                line += f", {rule.bulk.quantity} for {rule.bulk.price}"
            print(line)
        return True

    def scan_items(self, skus: list[str], catalogue_path: Optional[str] = None, policy: Optional[str] = None) -> bool:
        """Scan a batch of SKUs and print the summary"""
        try:
            catalogue = self._load(catalogue_path)
            scan_policy = ScanPolicy.parse(policy) if policy else self.config.scan_policy
        except ConfigError as e:
            print(CLIColors.error(f"❌ {e}"))
            return False

        try:
            run = run_checkout(catalogue, skus, scan_policy)
        except UnknownItemError as e:
            print(CLIColors.error(f"Error: {e}"))
            print(CLIColors.error("❌ Checkout aborted, no total computed."))
            return False

        for sku in run.rejected:
            print(CLIColors.warning(f"Error: invalid SKU: {sku} (skipped)"))
        return self.print_summary(run.session)

    def print_summary(self, session: Checkout) -> bool:
        """Print lines, promotions and the grand total; False if the total cannot be computed"""
        try:
            summary = summarize(session)
        except UnknownItemError as e:
            print(CLIColors.error(f"Error calculating total price: {e}"))
            return False
        self._print(summary)
        return True

    def _print(self, summary: CheckoutSummary) -> None:
        print(CLIColors.highlight("\nCheckout Summary:"))
        print("------------------")
        for line in summary.lines:
            print(f"{line.sku}: {line.quantity} x {line.unit_price} = {line.subtotal}")

        print(CLIColors.highlight("\nApplied Promotions:"))
        print("------------------")
        if not summary.promotions:
            print("None")
        for promo in summary.promotions:
            print(f"{promo.sku}: {promo.quantity} for {promo.price} applied {promo.applied} times. You saved {promo.saved}")

        print(CLIColors.success(f"\nTotal Price: {summary.total}"))

    def _ask_int(self, prompt: str) -> int:
        while True:
            raw = input(prompt).strip()
            try:
                value = int(raw)
            except ValueError:
                print(CLIColors.error(f"❌ Not a whole number: {raw!r}"))
                continue
            if value < 0:
                print(CLIColors.error("❌ Value cannot be negative"))
                continue
            return value

    def build_catalogue_interactive(self) -> Catalogue:
        """Prompt for SKUs, unit prices and special offers until a blank SKU"""
        print(CLIColors.info("\nLet's set up the product catalogue."))
        rules = {}
        while True:
            sku = input("Enter product SKU (or press Enter to finish): ").strip()
            if not sku:
                break

            rule = {"unit_price": self._ask_int(f"Enter unit price for {sku}: ")}
            answer = input(f"Is there a special offer for {sku}? (y/n): ").strip().lower()
            if answer in ["y", "yes"]:
                rule["bulk"] = {
                    "quantity": self._ask_int("Enter special offer quantity: "),
                    "price": self._ask_int("Enter special offer price: "),
                }
            rules[sku] = rule
        return build_catalogue(rules)

    def interactive_mode(self) -> bool:
        """Build a catalogue, scan items one by one, then print the summary"""
        print(CLIColors.highlight("🛒 Welcome to the Supermarket Checkout System!"))
        try:
            catalogue = self.build_catalogue_interactive()
            session = Checkout(catalogue)

            print(CLIColors.info("\nNow, let's scan items."))
            while True:
                sku = input("Scan an item (enter SKU or press Enter to finish): ").strip()
                if not sku:
                    break
                try:
                    session.scan(sku)
                except UnknownItemError as e:
                    print(CLIColors.error(f"Error: {e}"))
                else:
                    print(CLIColors.success("Item scanned successfully."))
        except (KeyboardInterrupt, EOFError):
            print("\n" + CLIColors.warning("👋 Checkout cancelled."))
            return False
        except ConfigError as e:
            print(CLIColors.error(f"❌ {e}"))
            return False

        return self.print_summary(session)

def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser"""
    parser = argparse.ArgumentParser(
        description="Supermarket checkout calculator with bulk promotions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s interactive
  %(prog)s scan A A B B A C D --catalogue prices.json
  %(prog)s scan A E --policy abort
  %(prog)s catalogue --catalogue prices.json
"""
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Scan command
    scan_parser = subparsers.add_parser("scan", help="Scan a list of SKUs and print the total")
    scan_parser.add_argument("skus", nargs="+", help="SKUs in scan order")
    scan_parser.add_argument("--catalogue", "-c", help="JSON catalogue (default: $CHECKOUT_CATALOGUE)")
    scan_parser.add_argument(
        "--policy",
        choices=[p.value for p in ScanPolicy],
        help="Unknown SKU handling (default: $CHECKOUT_SCAN_POLICY or skip)",
    )

    # Catalogue command
    cat_parser = subparsers.add_parser("catalogue", help="Show the pricing rules")
    cat_parser.add_argument("--catalogue", "-c", help="JSON catalogue (default: $CHECKOUT_CATALOGUE)")

    # Interactive command
    subparsers.add_parser("interactive", help="Build a catalogue and scan items from prompts")

    return parser

def main(argv: Optional[list[str]] = None):
    """Main CLI entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        cli = CheckoutCLI()
    except CheckoutError as e:
        print(CLIColors.error(f"❌ Failed to initialize CLI: {str(e)}"))
        sys.exit(1)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    if args.command == "scan":
        success = cli.scan_items(args.skus, args.catalogue, args.policy)

    elif args.command == "catalogue":
        success = cli.show_catalogue(args.catalogue)

    elif args.command == "interactive":
        success = cli.interactive_mode()

    else:
        print(CLIColors.error(f"❌ Unknown command: {args.command}"))
        parser.print_help()
        success = False

    sys.exit(0 if success else 1)

if __name__ == "__main__":
    main()
