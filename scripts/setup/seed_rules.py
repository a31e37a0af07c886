# scripts/setup/seed_rules.py
"""
Seed the default global surge bands. Skips seeding if any global rule exists.
Usage: python scripts/setup/seed_rules.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from datetime import datetime
from app.database import SessionLocal, create_tables
from app.models.surge_rule import SurgePricingRule
from app.services.rule_validation import validate_rule_bounds

# [min, max) occupancy percent → multiplier
DEFAULT_GLOBAL_BANDS = [
    (70, 85, 1.25),
    (85, 95, 1.5),
    (95, 101, 2.0),
]


def main():
    create_tables()
    db = SessionLocal()
    try:
        existing = db.query(SurgePricingRule).filter(SurgePricingRule.lot_id == None).count()  # noqa: E711
        if existing:
            print(f"⏭️  {existing} global rule(s) already present — nothing seeded")
            return

        for low, high, multiplier in DEFAULT_GLOBAL_BANDS:
            validate_rule_bounds(low, high, multiplier)
            db.add(SurgePricingRule(lot_id=None, min_occupancy_percent=low, max_occupancy_percent=high,
                                    multiplier=multiplier, is_active=True, created_at=datetime.utcnow()))
            print(f"   ✓ global [{low}, {high}) x{multiplier}")
        db.commit()
        print("🎉 Default surge bands seeded")
    finally:
        db.close()


if __name__ == "__main__":
    main()
