#!/usr/bin/env python3
"""
Seed script: creates donor accounts and listings via the API (no direct store access).
Run: API must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --users 10 --listings-per-user 5
"""

import argparse
import random
import sys
from pathlib import Path

# Project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import httpx

API_BASE = "http://localhost:8000/api"

NAMES = [
    "Corner Bakery", "Green Leaf Cafe", "Sunrise Diner", "Harbor Fish House", "Mama Rosa's",
    "City Food Bank", "Campus Kitchen", "Fresh Fields Market", "Noodle Bar 88", "Hillside Hotel",
]
ROLES = ["donor", "restaurant", "grocery", "volunteer"]
TYPES = ["bakery", "cooked", "produce", "dairy", "packaged"]
QUANTITIES = ["5 kg", "12 loaves", "20 meals", "3 crates", "1 tray", "40 portions"]
STREETS = ["Main St", "Market Ave", "Harbor Rd", "Elm St", "Station Sq", "River Walk"]
NOTES = [
    "Pick up at the back door.",
    "Vegetarian, no nuts.",
    "Refrigerate on arrival.",
    "Ask for the shift manager.",
    "",
]


def random_listing(name: str) -> dict:
    return {
        "role": random.choice(ROLES),
        "name": name,
        "phone": f"555-{random.randint(1000, 9999)}",
        "address": f"{random.randint(1, 300)} {random.choice(STREETS)}",
        "type": random.choice(TYPES),
        "quantity": random.choice(QUANTITIES),
        "notes": random.choice(NOTES),
        "safeBy": f"{random.randint(17, 23)}:00",
    }


def main():
    ap = argparse.ArgumentParser(description="Seed users and listings via API")
    ap.add_argument("--users", type=int, default=5, help="Number of users to create")
    ap.add_argument("--listings-per-user", type=int, default=3, help="Listings per user")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    created_users = []
    created_listings = 0
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        # 1) Create users
        print(f"Creating {args.users} users...")
        for i in range(args.users):
            email = f"donor{i+1}@example.com"
            password = "password123"
            name = NAMES[i % len(NAMES)]
            try:
                r = client.post("/signup", json={"name": name, "email": email, "password": password})
                if r.status_code == 200 or (r.status_code == 400 and "exists" in r.text):
                    # Existing account: same creds still log in
                    created_users.append({"email": email, "password": password, "name": name})
                else:
                    errors.append(f"Signup {email}: {r.status_code} {r.text[:80]}")
            except httpx.HTTPError as e:
                errors.append(f"Signup {email}: {e!r}")

        # 2) Login and post listings per user
        print(f"Creating ~{len(created_users) * args.listings_per_user} listings (login + POST)...")
        for u in created_users:
            try:
                r = client.post("/login", json={"email": u["email"], "password": u["password"]})
                if r.status_code != 200:
                    errors.append(f"Login {u['email']}: {r.status_code}")
                    continue
                headers = {"Authorization": f"Bearer {r.json()['token']}"}
                for _ in range(args.listings_per_user):
                    r2 = client.post("/listings", headers=headers, json=random_listing(u["name"]))
                    if r2.status_code == 200:
                        created_listings += 1
                    else:
                        errors.append(f"Listing {u['email']}: {r2.status_code}")
            except httpx.HTTPError as e:
                errors.append(f"User {u['email']}: {e!r}")
            print(f"  {u['email']}: total listings so far: {created_listings}")

    print(f"\nDone. Users: {len(created_users)}, Listings created: {created_listings}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")


if __name__ == "__main__":
    main()
