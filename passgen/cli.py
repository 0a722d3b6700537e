"""passgen command-line interface.

Usage examples:
    python -m passgen generate -n 20 -c 5
    python -m passgen generate --words 4 --language swedish
    python -m passgen check mypassword --strength
    python -m passgen phonetic 'Ab3!' --alphabet swedish
    python -m passgen share 'S3cret!' --views 2 --days 3
    python -m passgen presets add "Wifi" 24 --no-special
"""

import argparse
import logging
import sys

from passgen import config
from passgen.breach import check_breach
from passgen.errors import ValidationError
from passgen.generators import generate_memorable, generate_password
from passgen.phonetic import transliterate
from passgen.presets import PresetStore
from passgen.share import ShareClient, extract_token
from passgen.strength import score_strength

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler()],
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="passgen",
        description="Generate, check and share passwords.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument(
        "--presets-file", default=str(config.PRESETS_FILE),
        help=f"Preset file (default: {config.PRESETS_FILE})",
    )
    sub = parser.add_subparsers(dest="command")

    # ── generate ───────────────────────────────────────────────────────
    gen_p = sub.add_parser("generate", help="Generate passwords")
    gen_p.add_argument(
        "-n", "--length", type=int, default=15,
        help=f"Password length, {config.MIN_LENGTH}-{config.MAX_LENGTH} (default: 15)",
    )
    gen_p.add_argument(
        "-w", "--words", type=int,
        help=f"Generate a memorable password of {config.MIN_WORDS}-{config.MAX_WORDS} words",
    )
    gen_p.add_argument(
        "-l", "--language", default="English", help="Word list language (English, Swedish)",
    )
    gen_p.add_argument("-p", "--preset", help="Use the settings of a saved preset")
    gen_p.add_argument("--no-uppercase", action="store_true")
    gen_p.add_argument("--no-digits", action="store_true")
    gen_p.add_argument("--no-symbols", action="store_true")
    gen_p.add_argument(
        "-c", "--count", type=int, default=1,
        help="Number of passwords to generate (default: 1)",
    )

    # ── check ──────────────────────────────────────────────────────────
    check_p = sub.add_parser(
        "check", help="Check passwords against the breach database",
    )
    check_p.add_argument("passwords", nargs="*", help="Passwords to check")
    check_p.add_argument(
        "-f", "--file",
        help="Read passwords from a file (one per line)",
    )
    check_p.add_argument(
        "-s", "--strength",
        action="store_true",
        help="Include strength analysis in output",
    )

    # ── strength ───────────────────────────────────────────────────────
    strength_p = sub.add_parser("strength", help="Estimate password strength offline")
    strength_p.add_argument("passwords", nargs="+")

    # ── phonetic ───────────────────────────────────────────────────────
    phon_p = sub.add_parser("phonetic", help="Spell a password phonetically")
    phon_p.add_argument("password")
    phon_p.add_argument(
        "-a", "--alphabet", default="NATO", help="NATO or Swedish (default: NATO)",
    )

    # ── share / expire ─────────────────────────────────────────────────
    share_p = sub.add_parser("share", help="Create an ephemeral share link")
    share_p.add_argument("password")
    share_p.add_argument("--days", type=int, default=config.DEFAULT_EXPIRE_DAYS)
    share_p.add_argument("--views", type=int, default=config.DEFAULT_EXPIRE_VIEWS)
    share_p.add_argument(
        "--no-viewer-delete", action="store_true",
        help="Do not let the viewer delete the link",
    )
    share_p.add_argument(
        "--retrieval-step", action="store_true",
        help="Require a click-through before revealing the password",
    )
    share_p.add_argument("--passphrase", help="Passphrase the viewer must enter")
    share_p.add_argument("--qr", action="store_true", help="Share as a QR code")
    share_p.add_argument("--curl", action="store_true", help="Try curl before requests")
    share_p.add_argument(
        "--skip-breach-check", action="store_true",
        help="Share without checking the breach database first",
    )

    expire_p = sub.add_parser("expire", help="Expire a share link")
    expire_p.add_argument("token", help="Link token or full link URL")

    # ── presets ────────────────────────────────────────────────────────
    presets_p = sub.add_parser("presets", help="Manage saved presets")
    presets_sub = presets_p.add_subparsers(dest="action")
    presets_sub.add_parser("list", help="List all presets")

    for action in ("add", "edit"):
        p = presets_sub.add_parser(action, help=f"{action.title()} a preset")
        p.add_argument("name")
        if action == "edit":
            p.add_argument("--rename", help="New name for the preset")
        p.add_argument("length", type=int)
        p.add_argument("--no-uppercase", action="store_true")
        p.add_argument("--no-numbers", action="store_true")
        p.add_argument("--no-special", action="store_true")
        p.add_argument("--default", action="store_true", help="Select by default")

    for action in ("remove", "enable", "disable", "default"):
        p = presets_sub.add_parser(action, help=f"{action.title()} a preset")
        p.add_argument("name")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "strength":
        return _cmd_strength(args)
    if args.command == "phonetic":
        return _cmd_phonetic(args)
    if args.command == "share":
        return _cmd_share(args)
    if args.command == "expire":
        return _cmd_expire(args)
    if args.command == "presets" and args.action:
        return _cmd_presets(args)

    parser.print_help()
    return 0


def _print_strength(report: dict, indent: str = "            ") -> None:
    filled = round(report["percentage"] / 20)
    bar = "#" * filled + "-" * (5 - filled)
    print(f"{indent}Strength: [{bar}] {report['label']} ({report['entropy']} bits)")


def _cmd_generate(args: argparse.Namespace) -> int:
    length = args.length
    uppercase = not args.no_uppercase
    digits = not args.no_digits
    symbols = not args.no_symbols

    if args.preset:
        store = PresetStore(args.presets_file)
        store.load()
        preset = store.get(args.preset)
        if preset is None:
            print(f"Error: no preset named '{args.preset}'", file=sys.stderr)
            return 1
        length = preset.length
        uppercase = preset.include_uppercase
        digits = preset.include_numbers
        symbols = preset.include_special

    try:
        for _ in range(args.count):
            if args.words:
                pwd = generate_memorable(
                    args.words, args.language,
                    uppercase=uppercase, digits=digits, symbols=symbols,
                )
            else:
                pwd = generate_password(
                    length, uppercase=uppercase, digits=digits, symbols=symbols,
                )
            report = score_strength(pwd)
            print(f"  {pwd}  ({report['label']}, {report['entropy']} bits)")
    except ValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    passwords = list(args.passwords)

    if args.file:
        with open(args.file) as f:
            passwords.extend(line.strip() for line in f if line.strip())

    if not passwords:
        print("Error: provide passwords as arguments or via --file", file=sys.stderr)
        return 1

    breached = False
    for pwd in passwords:
        result = check_breach(pwd)
        if result["status"] != "ok":
            print(f"  ERROR     '{pwd}' -- {result['error']}")
            breached = True
        elif result["found"]:
            print(f"  BREACHED  '{pwd}' -- found {result['count']:,} times")
            breached = True
        else:
            print(f"  Safe      '{pwd}' -- not found in any known breaches")

        if args.strength:
            _print_strength(score_strength(pwd))

    return 1 if breached else 0


def _cmd_strength(args: argparse.Namespace) -> int:
    for pwd in args.passwords:
        print(f"  '{pwd}'")
        _print_strength(score_strength(pwd), indent="    ")
    return 0


def _cmd_phonetic(args: argparse.Namespace) -> int:
    try:
        pairs = transliterate(args.password, args.alphabet)
    except ValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    for char, word in pairs:
        print(f"  {char}  {word}")
    return 0


def _cmd_share(args: argparse.Namespace) -> int:
    if not args.skip_breach_check:
        result = check_breach(args.password)
        if result["found"]:
            print("Error: password was found in a data breach, not sharing it", file=sys.stderr)
            return 1

    result = ShareClient().push(
        args.password,
        expire_days=args.days,
        expire_views=args.views,
        deletable_by_viewer=not args.no_viewer_delete,
        retrieval_step=args.retrieval_step,
        passphrase=args.passphrase,
        use_qr=args.qr,
        prefer_curl=args.curl,
    )
    for line in result["log"].splitlines():
        logger.debug(line)
    if not result["success"]:
        print(f"Error: sharing failed\n{result['log']}", file=sys.stderr)
        return 1
    print(f"  {result['url']}{'  (QR)' if result['is_qr'] else ''}")
    return 0


def _cmd_expire(args: argparse.Namespace) -> int:
    token = extract_token(args.token) if "/" in args.token else args.token
    result = ShareClient().expire(token)
    print(f"  {result['log']}")
    return 0 if result["success"] else 1


def _cmd_presets(args: argparse.Namespace) -> int:
    store = PresetStore(args.presets_file)
    store.load()

    if args.action == "list":
        default = store.default_selection()
        for p in store.presets:
            flags = "".join([
                "U" if p.include_uppercase else "-",
                "N" if p.include_numbers else "-",
                "S" if p.include_special else "-",
            ])
            marks = []
            if p.is_built_in:
                marks.append("built-in")
            if not p.enabled:
                marks.append("disabled")
            if default is not None and p is default:
                marks.append("default")
            suffix = f"  [{', '.join(marks)}]" if marks else ""
            print(f"  {p.name:<24} {p.length:>2}  {flags}{suffix}")
        return 0

    if args.action == "add":
        result = store.add(
            args.name, args.length,
            uppercase=not args.no_uppercase, numbers=not args.no_numbers,
            special=not args.no_special, is_default_selection=args.default,
        )
    elif args.action == "edit":
        result = store.edit(
            args.name, args.rename or args.name, args.length,
            uppercase=not args.no_uppercase, numbers=not args.no_numbers,
            special=not args.no_special, is_default_selection=args.default,
        )
    elif args.action == "remove":
        result = store.remove(args.name)
    elif args.action in ("enable", "disable"):
        result = store.set_enabled(args.name, args.action == "enable")
    else:
        result = store.set_default_selection(args.name)

    print(f"  {result['message']}")
    return 0 if result["success"] else 1


if __name__ == "__main__":
    sys.exit(main())
