#!/usr/bin/env python3
"""
Run every billing client operation against the configured invoker and print
each result to the terminal.

Usage (from repo root):
  python scripts/run_billing_demo.py
  python scripts/run_billing_demo.py --platform ios --config config/bridge_config.yml
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from billing_bridge.bootstrap import create_billing_client
from billing_bridge.error_handler import BillingErrorHandler
from billing_bridge.integrations.errors import BillingError
from billing_bridge.utils.bridge_config_loader import load_bridge_config


def setup_logging():
    """Log to terminal at INFO so every call is visible."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def print_stage(title: str, data):
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)
    if isinstance(data, list):
        data = [item.model_dump() if hasattr(item, "model_dump") else item for item in data]
    elif hasattr(data, "model_dump"):
        data = data.model_dump()
    print(json.dumps(data, indent=2, default=str))
    print()


async def main(args: argparse.Namespace) -> int:
    setup_logging()
    config = load_bridge_config(Path(args.config) if args.config else None)
    if args.platform:
        config = config.model_copy(update={"platform": args.platform})

    client = create_billing_client(config)
    handler = BillingErrorHandler()

    try:
        await client.configure_from(config)
        products = await client.retrieve_products(args.products)
        print_stage("PRODUCTS", products)
        if products:
            print_stage("PURCHASE", await client.purchase_product(products[0], args.customer_id))
        print_stage("SUBSCRIPTIONS", await client.retrieve_subscriptions({"customer_id": args.customer_id}))
        print_stage("PRODUCT IDENTIFIERS", await client.retrieve_product_identifiers({"limit": "10"}))
        print_stage("ENTITLEMENTS", await client.retrieve_entitlement_details({"subscriptionId": "AzZlGJTGbXxa2Aq1"}))
        print_stage("ITEMS", await client.retrieve_all_items({"limit": "10"}))
        print_stage("PLANS", await client.retrieve_all_plans({"limit": "10"}))
    except BillingError as exc:
        print_stage("ERROR", handler.handle_exception(exc, {"platform": client.platform.value}))
        return 1
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Exercise the billing client end to end.")
    parser.add_argument("--config", help="Path to bridge_config.yml")
    parser.add_argument("--platform", choices=["auto", "ios", "android"])
    parser.add_argument("--customer-id", default="cust_demo_001")
    parser.add_argument("--products", nargs="+", default=["premium_monthly", "premium_yearly"])
    sys.exit(asyncio.run(main(parser.parse_args())))
