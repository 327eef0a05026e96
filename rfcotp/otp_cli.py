#!/usr/bin/env python3
"""
otp_cli.py — CLI wrapper for rfcotp

Subcommands:
- hotp   : HOTP code for a counter
- totp   : TOTP code for now (or --time)
- verify : check a TOTP / HOTP code with a skew window

The secret is given on the command line, Base32 (--secret) or hex
(--secret-hex). Nothing is read from or written to disk.

eg..:
    rfcotp hotp --secret GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ --counter 1
    rfcotp totp --secret GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ --digits 8 --time 59
    rfcotp verify totp --secret ... --code 287082 --back 1 --forward 1
    rfcotp verify hotp --secret ... --code 287082 --counter 0 --look-ahead 3
"""

import argparse
import base64
import binascii
import sys
import time

from .keyed_hash import DEFAULT_ALGORITHM, HashAlgorithm, resolve_algorithm
from .otp_core import DEFAULT_DIGITS, DEFAULT_STEP, hotp, remaining_seconds, time_counter, totp
from .otp_verify import check_hotp, check_totp

EXIT_OK = 0
EXIT_INVALID_CODE = 1
EXIT_USAGE = 2


def log(msg: str, verbose: bool):
    if verbose:
        print(f"[+] {msg}")


def format_code(code: int, digits: int) -> str:
    """Zero-pad a code for display: format_code(7081804, 8) -> '07081804'."""
    return str(code).zfill(digits)


def decode_base32_secret(secret_b32: str) -> bytes:
    """
    Base32-decode a secret, case-insensitive, '=' padding optional.

    Raises:
        ValueError: if the secret is not valid Base32
    """
    cleaned = secret_b32.replace(" ", "").upper()
    cleaned += "=" * (-len(cleaned) % 8)
    try:
        return base64.b32decode(cleaned, casefold=True)
    except binascii.Error as e:
        raise ValueError("Invalid Base32 secret") from e


def decode_hex_secret(secret_hex: str) -> bytes:
    try:
        return bytes.fromhex(secret_hex)
    except ValueError as e:
        raise ValueError("Invalid hex secret") from e


def secret_from_args(args) -> bytes:
    if args.secret_hex is not None:
        return decode_hex_secret(args.secret_hex)
    return decode_base32_secret(args.secret)


def parse_code(code: str) -> int:
    if not code.isdigit():
        raise ValueError(f"OTP code must be numeric, got {code!r}")
    return int(code)


def _now(args) -> int:
    return args.time if args.time is not None else int(time.time())


# --- CLI command handlers ---
def cmd_hotp(args) -> int:
    secret = secret_from_args(args)
    algorithm = resolve_algorithm(args.algorithm)
    log(f"HOTP: HMAC-{algorithm.value}(key=secret, msg=counter={args.counter})", args.verbose)
    code = hotp(args.counter, args.digits, secret, algorithm)
    print(f"HOTP({args.digits}d, counter={args.counter}): {format_code(code, args.digits)}")
    return EXIT_OK


def cmd_totp(args) -> int:
    secret = secret_from_args(args)
    algorithm = resolve_algorithm(args.algorithm)
    now = _now(args)
    log(f"TOTP: time={now}, step={args.period}, counter={time_counter(now, args.period)}, "
        f"algorithm={algorithm.value}", args.verbose)
    code = totp(now, args.period, args.digits, secret, algorithm)
    remaining = remaining_seconds(now, args.period)
    print(f"TOTP ({args.digits}d): {format_code(code, args.digits)}  (valid ~{remaining:2d}s)")
    return EXIT_OK


def cmd_verify_totp(args) -> int:
    secret = secret_from_args(args)
    algorithm = resolve_algorithm(args.algorithm)
    now = _now(args)
    log(f"Verify TOTP: time={now}, step={args.period}, window=(-{args.back}, +{args.forward})",
        args.verbose)
    ok = check_totp(now, args.period, secret, args.digits,
                    (args.back, args.forward), parse_code(args.code), algorithm)
    if ok:
        print("[+] TOTP code is VALID")
        return EXIT_OK
    print("[-] TOTP code is INVALID")
    return EXIT_INVALID_CODE


def cmd_verify_hotp(args) -> int:
    secret = secret_from_args(args)
    algorithm = resolve_algorithm(args.algorithm)
    log(f"Verify HOTP: counter={args.counter}, look-ahead={args.look_ahead}", args.verbose)
    ok = check_hotp(args.counter, secret, args.digits, args.look_ahead,
                    parse_code(args.code), algorithm)
    if ok:
        print("[+] HOTP code is VALID")
        return EXIT_OK
    print("[-] HOTP code is INVALID")
    return EXIT_INVALID_CODE


def cmd_help(args) -> int:
    print("No command specified. Use -h for help.")
    return EXIT_USAGE


# --- Argparse builder ---
def _add_common(p: argparse.ArgumentParser) -> None:
    group = p.add_mutually_exclusive_group(required=True)
    group.add_argument("--secret", help="Shared secret, Base32")
    group.add_argument("--secret-hex", help="Shared secret, hex")
    p.add_argument("--digits", type=int, default=DEFAULT_DIGITS, help="Number of OTP digits")
    p.add_argument("--algorithm", default=DEFAULT_ALGORITHM.value,
                   help="HMAC hash algorithm: " + ", ".join(a.value for a in HashAlgorithm))
    p.add_argument("--verbose", action="store_true", help="Verbose output")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="rfcotp", description="HOTP/TOTP (RFC 4226 / RFC 6238) codes")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help)

    # hotp
    ph = sub.add_parser("hotp", help="Generate HOTP code for a specific counter")
    _add_common(ph)
    ph.add_argument("--counter", type=int, required=True)
    ph.set_defaults(func=cmd_hotp)

    # totp
    pt = sub.add_parser("totp", help="Generate TOTP code for the current (or given) time")
    _add_common(pt)
    pt.add_argument("--time", type=int, help="Unix time (default: now)")
    pt.add_argument("--period", type=int, default=DEFAULT_STEP, help="TOTP time step (seconds)")
    pt.set_defaults(func=cmd_totp)

    # verify
    pv = sub.add_parser("verify", help="Verify an OTP code (TOTP or HOTP)")
    sub_v = pv.add_subparsers(dest="verify_type")
    pv.set_defaults(func=cmd_help)

    pvt = sub_v.add_parser("totp", help="Verify a TOTP code")
    _add_common(pvt)
    pvt.add_argument("--code", required=True, help="OTP code to verify")
    pvt.add_argument("--time", type=int, help="Unix time (default: now)")
    pvt.add_argument("--period", type=int, default=DEFAULT_STEP, help="TOTP time step (seconds)")
    pvt.add_argument("--back", type=int, default=1, help="Steps accepted before the current one")
    pvt.add_argument("--forward", type=int, default=1, help="Steps accepted after the current one")
    pvt.set_defaults(func=cmd_verify_totp)

    pvh = sub_v.add_parser("hotp", help="Verify a HOTP code")
    _add_common(pvh)
    pvh.add_argument("--code", required=True, help="OTP code to verify")
    pvh.add_argument("--counter", type=int, required=True, help="Current HOTP counter")
    pvh.add_argument("--look-ahead", type=int, default=1, help="Allowed counter look-ahead")
    pvh.set_defaults(func=cmd_verify_hotp)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except ValueError as e:
        print(f"[!] {e}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
