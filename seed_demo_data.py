#!/usr/bin/env python3
"""
Demo Data Setup Script
Creates the tables and loads demo accounts, faculty and sample OD requests
"""

import sys

from odflow import create_app
from odflow.services.seed import DEMO_USERS, seed_demo_data


def main():
    """Seed the configured database"""
    print("🔧 Loading ODFlow demo data...")

    app = create_app()
    with app.app_context():
        password = app.config['DEMO_PASSWORD']
        if not seed_demo_data(password):
            print("✅ Demo data already present, nothing to do")
            return True

    print("✅ Demo data loaded")
    print("\n🔑 Demo accounts (password: {}):".format(password))
    for username, name, role, department, _ in DEMO_USERS:
        print(f"   {username:<14} {role:<10} {name}" + (f" ({department})" if department else ""))
    return True


if __name__ == "__main__":
    if not main():
        sys.exit(1)
    print("\nNext step: python main.py")
