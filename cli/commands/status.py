"""Status CLI command."""

from ruuvi_decoders.config import DEFAULT_CONFIG_PATH, load_config


def do_status(arg: str) -> None:
    """Show current configuration status."""
    config = load_config()

    print("Configuration Status")
    print("=" * 50)

    print(f"\nConfig file: {DEFAULT_CONFIG_PATH}")
    if not DEFAULT_CONFIG_PATH.exists():
        print("  (not found, using defaults)")

    print("\nDecoder:")
    print(f"  company_id: 0x{config.decoder.company_id:04X}")
    print(f"  duplicates: {config.decoder.duplicates}")

    print("\nLogging:")
    print(f"  level: {config.logging.level}")
