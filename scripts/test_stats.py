# scripts/test_stats.py
# Run from project root: python scripts/test_stats.py

import sys, os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from dotenv import load_dotenv
load_dotenv()
from app import create_app

app = create_app('development')

with app.app_context():
    print("\n=== Registration Stats Test ===")

    stats = app.extensions['registration_store'].stats()

    print(f"\n{'Key':<30} {'Value'}")
    print("-" * 50)
    for k, v in stats.items():
        print(f"{k:<30} {v}")

    # Sanity checks
    assert all(isinstance(v, int) for v in stats.values()), "❌ counts must be ints"
    assert stats['today'] <= stats['thisWeek'] <= stats['total'], "❌ buckets out of order"

    print("\n✅ Stats sanity checks passed.")
