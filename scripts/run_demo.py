#!/usr/bin/env python3
"""
run_demo.py - End-to-end demo against a running storefront service
- Registers and logs in a customer
- Creates two products
- Places an order and checks stock went down
- Cancels the order and checks stock came back
"""

import argparse
import json
import os
from typing import Any, Dict, Optional, Tuple

import requests


class DemoRunner:
    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")
        self.auth_url = f"{self.base_url}/api/auth"
        self.products_url = f"{self.base_url}/api/products"
        self.orders_url = f"{self.base_url}/api/orders"

        self.cust_email = "cust@example.com"
        self.cust_pass = "P@ssw0rd!"

        self.user_id: Optional[int] = None
        self.access_token: Optional[str] = None

    # ---------- helpers ----------
    def show_step(self, title: str):
        print(f"\n=== {title} ===")

    def mask_token(self, token: str) -> str:
        if not token:
            return "<none>"
        return token if len(token) <= 12 else f"{token[:8]}...{token[-6:]}"

    def call_api(
        self,
        method: str,
        url: str,
        data: Optional[Any] = None,
        params: Optional[Dict] = None,
        expected_status: Tuple[int, ...] = (200, 201, 204),
        quiet: bool = False,
        timeout: int = 30,
    ):
        if not quiet:
            print(f"\n-> {method} {url}")
            if data is not None:
                print(f"   Body: {json.dumps(data, indent=2)}")

        try:
            resp = requests.request(method=method, url=url, json=data, params=params, timeout=timeout)
        except requests.exceptions.RequestException as e:
            print(f"   Error: \033[91m{e}\033[0m")
            return {"status": None, "data": None, "error": str(e)}

        if not quiet:
            status_color = "\033[92m" if resp.status_code in expected_status else "\033[93m"
            print(f"   Status: {status_color}{resp.status_code}\033[0m")
        try:
            js = resp.json()
        except ValueError:
            js = None
        if js is not None and not quiet:
            print(json.dumps(js, indent=2))
        return {"status": resp.status_code, "data": js}

    def stock_of(self, product_id: int) -> Optional[int]:
        result = self.call_api("GET", f"{self.products_url}/{product_id}", quiet=True)
        return (result.get("data") or {}).get("stock")

    # ---------- flow ----------
    def preflight(self) -> bool:
        self.show_step("Preflight: service health")
        result = self.call_api("GET", f"{self.base_url}/health", expected_status=(200,), quiet=True)
        ok = result.get("status") == 200
        print(f"  - storefront -> {'OK' if ok else 'FAIL'}")
        return ok

    def run_demo(self):
        print("Starting storefront demo")
        print("=" * 50)
        if not self.preflight():
            return

        self.show_step("Customer: register")
        self.call_api(
            "POST",
            f"{self.auth_url}/register",
            data={
                "name": "Demo Customer",
                "email": self.cust_email,
                "password": self.cust_pass,
                "address": "1 Demo Street",
                "phone": "555-0100",
            },
            expected_status=(201, 400),
        )

        self.show_step("Customer: login")
        lr = self.call_api("POST", f"{self.auth_url}/login", data={"email": self.cust_email, "password": self.cust_pass})
        if not lr.get("data") or lr.get("status") != 200:
            print("Login failed, stopping.")
            return
        self.user_id = lr["data"]["user"]["id"]
        self.access_token = lr["data"].get("access_token")
        print(f"Customer id={self.user_id} token={self.mask_token(self.access_token)}")

        self.show_step("Catalog: create products")
        p1 = self.call_api(
            "POST",
            self.products_url,
            data={"name": "Espresso Cup", "description": "Porcelain, 90ml", "price": "5.00", "stock": 10},
        )["data"]
        p2 = self.call_api(
            "POST",
            self.products_url,
            data={"name": "Grinder", "description": "Manual burr grinder", "price": "20.00", "stock": 3},
        )["data"]

        self.show_step("Customer: place order")
        order = self.call_api(
            "POST",
            self.orders_url,
            data={
                "user_id": self.user_id,
                "items": [{"product_id": p1["id"], "quantity": 2}, {"product_id": p2["id"], "quantity": 1}],
            },
        )["data"]
        print(f"Order #{order['id']} total={order['total']} status={order['status']}")
        print(f"Stock now: cup={self.stock_of(p1['id'])} grinder={self.stock_of(p2['id'])}")

        self.show_step("Customer: over-order (expect 400)")
        self.call_api(
            "POST",
            self.orders_url,
            data={"user_id": self.user_id, "items": [{"product_id": p2["id"], "quantity": 99}]},
            expected_status=(400,),
        )

        self.show_step("Customer: order history")
        self.call_api("GET", f"{self.orders_url}/user/{self.user_id}")

        self.show_step("Customer: cancel order")
        self.call_api("PUT", f"{self.orders_url}/{order['id']}/cancel")
        print(f"Stock now: cup={self.stock_of(p1['id'])} grinder={self.stock_of(p2['id'])}")

        print("\nDemo finished.")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--base-url", default=os.getenv("STOREFRONT_URL", "http://localhost:8000"))
    args = ap.parse_args()
    DemoRunner(args.base_url).run_demo()


if __name__ == "__main__":
    main()
