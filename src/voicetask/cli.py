import argparse
import json
import logging

import pytz

from voicetask.config import settings


def setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def parse_text(text: str, locale: str, timezone: str | None, as_json: bool) -> None:
    from voicetask.services.parser import RawUtterance, VoiceCommandParser

    parser = VoiceCommandParser(timezone=timezone)
    command = parser.parse(RawUtterance(text, locale))

    if as_json:
        print(json.dumps(command.to_dict(), ensure_ascii=False, indent=2))
        return

    print(f"Title:    {command.title}")
    print(f"Due:      {parser.tz.format_for_display(command.due_at, include_timezone=True)}")
    print(f"Priority: {command.priority.value}")
    if command.location:
        print(f"Location: {command.location}")
    if command.notes:
        print(f"Notes:    {command.notes}")
    print(f"Locale:   {command.locale}")


def list_locales() -> None:
    from voicetask.services.locales import AUTO_LOCALE, store

    default = store.resolve_id(AUTO_LOCALE)
    print(f"  {AUTO_LOCALE:<6} -> {default}")
    for profile in store.profiles():
        print(f"  {profile.flag} {profile.locale_id:<6} {profile.name:<16} \"{profile.example}\"")


def check_config() -> bool:
    from voicetask.services.dates import date_patterns
    from voicetask.services.locales import phrases_for, store
    from voicetask.services.location import location_rules
    from voicetask.services.times import time_patterns

    print("Voice Task Configuration Check\n")
    zone_note = "" if settings.has_custom_timezone else " (default)"
    search = "active locale + en-US" if settings.is_strict_locale else "all locales"
    print(f"  Timezone:      {settings.user_timezone}{zone_note}")
    print(f"  Locale search: {search}\n")

    checks = [
        ("Timezone", settings.user_timezone in pytz.all_timezones_set),
        ("Default locale", store.resolve_id(settings.default_locale) == settings.default_locale),
        ("Log level", isinstance(getattr(logging, settings.log_level.upper(), None), int)),
    ]

    failed_profiles = []
    for locale_id in store.locale_ids:
        view = phrases_for(locale_id)
        try:
            date_patterns(view)
            time_patterns(view)
            location_rules(view)
        except Exception as e:
            failed_profiles.append(f"{locale_id}: {e}")
    checks.append((f"Locale patterns ({len(store.locale_ids)} profiles)", not failed_profiles))

    all_ok = True
    for name, ok in checks:
        status = "OK" if ok else "INVALID"
        symbol = "+" if ok else "-"
        print(f"  [{symbol}] {name}: {status}")
        all_ok = all_ok and ok

    for failure in failed_profiles:
        print(f"      {failure}")

    print()
    if all_ok:
        print("Configuration valid. Ready to parse.")
    else:
        print("Invalid configuration. See .env.example for setup.")
    return all_ok


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Offline voice-command interpreter")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    parse_cmd = subparsers.add_parser("parse", help="Interpret an utterance")
    parse_cmd.add_argument("text", help="Transcribed utterance")
    parse_cmd.add_argument("--locale", default="Auto", help="Locale id, e.g. id-ID (default: Auto)")
    parse_cmd.add_argument("--timezone", default=None, help="IANA timezone (default: USER_TIMEZONE)")
    parse_cmd.add_argument("--json", action="store_true", help="Print the result as JSON")

    subparsers.add_parser("locales", help="List supported locales")
    subparsers.add_parser("check", help="Check configuration")

    args = parser.parse_args(argv)

    setup_logging()

    if args.command == "parse":
        parse_text(args.text, args.locale, args.timezone, args.json)
    elif args.command == "locales":
        list_locales()
    elif args.command == "check":
        if not check_config():
            raise SystemExit(1)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
