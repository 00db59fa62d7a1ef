from __future__ import annotations

import importlib
import sys
from pathlib import Path

from config import get_settings_module

from hostel_system.database.bootstrap import apply_seed_sql, ensure_admin_binding


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    seed_path = Path(__file__).resolve().parents[1] / "database" / "seed.sql"
    apply_seed_sql(db_config, seed_path=seed_path)

    # Optional: python scripts/seed_db.py <admin-identity>
    admin_identity = sys.argv[1] if len(sys.argv) > 1 else getattr(settings, "BOOTSTRAP_ADMIN_IDENTITY", "")
    ensure_admin_binding(db_config, admin_identity)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
        + (f" (admin identity: {admin_identity})" if admin_identity else "")
    )


if __name__ == "__main__":
    main()
