#!/usr/bin/env python3
"""Check the .env file and report which optional services are configured."""

from pathlib import Path
import sys

TEMPLATE = """# Supabase configuration (optional, enables cross-device sync)
# Get these from: https://supabase.com/dashboard -> Your Project -> Settings -> API
TOURCRM_SUPABASE_URL=https://your-project-id.supabase.co
TOURCRM_SUPABASE_KEY=your-api-key-here
TOURCRM_SUPABASE_TABLE=clients

# Local snapshot directory
TOURCRM_DATA_ROOT=./data

# Delay (seconds) between the last change and the automatic upload
TOURCRM_SYNC_DEBOUNCE_SECONDS=2

# Geocoding (optional, leave empty to place new clients at the fallback location)
# TOURCRM_GEOCODER_BASE_URL=https://nominatim.openstreetmap.org

# Weather at the next stop (empty disables the lookup)
# TOURCRM_WEATHER_BASE_URL=https://api.open-meteo.com/v1
"""


def _mask(value: str) -> str:
    return value[:12] + "..." if len(value) > 12 else value


def main() -> int:
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    if not env_file.exists():
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print(f"Created template .env file at: {env_file}")
        print("Edit it and add your Supabase credentials to enable sync.")
        return 1

    print(f"Found .env file at: {env_file}")
    sys.path.insert(0, str(project_root / "src"))
    try:
        from tourcrm.config import Settings

        settings = Settings()
    except Exception as e:
        print(f"Error loading config: {e}")
        return 1

    if settings.supabase_configured:
        print(f"Supabase sync configured: {_mask(settings.supabase_url or '')} (table '{settings.supabase_table}')")
    else:
        print("Supabase sync NOT configured: set TOURCRM_SUPABASE_URL and TOURCRM_SUPABASE_KEY")

    if settings.geocoder_base_url:
        print(f"Geocoder configured: {settings.geocoder_base_url}")
    else:
        print("Geocoder not configured: new clients are placed at the fallback location")

    print(f"Local snapshot directory: {settings.data_root}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
