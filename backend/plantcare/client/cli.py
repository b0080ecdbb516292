#!/usr/bin/env python3
"""
PlantCare command-line client

Usage:
    plantcare-cli health
    plantcare-cli signup --name Asha --phone 9876543210
    plantcare-cli signin --phone 9876543210
    plantcare-cli scan leaf.jpg --phone 9876543210

The OTP is prompted for unless passed with --otp. Set PLANTCARE_API_URL to
point at a server other than http://localhost:8000/api.
"""
import argparse
import sys

from .api import PlantCareClient, ApiError, ClientValidationError
from .session import ClientSession, SCAN, RESULT
from ..utils.validators import format_phone_display

SEVERITY_ICONS = {
    "high": "🔴",
    "medium": "🟠",
    "low": "🟡",
}


def confidence_level(confidence: float) -> str:
    if confidence >= 0.9:
        return "Very High"
    if confidence >= 0.75:
        return "High"
    if confidence >= 0.5:
        return "Medium"
    return "Low"


def severity_icon(severity: str) -> str:
    return SEVERITY_ICONS.get(severity, "🟢")


def render_result(result: dict) -> str:
    """Text version of the result page"""
    disease = result.get("disease") or {}
    confidence = disease.get("confidence") or 0

    lines = ["=" * 60, f"  {disease.get('name', 'Unknown')}"]
    if disease.get("scientificName"):
        lines.append(f"  ({disease['scientificName']})")
    lines.append("=" * 60)
    lines.append(f"Confidence: {confidence_level(confidence)} ({confidence * 100:.1f}% match)")

    if not result.get("isHealthy") and result.get("severity"):
        severity = result["severity"]
        lines.append(f"Severity: {severity_icon(severity)} {severity.capitalize()}")

    if disease.get("description"):
        lines.append("")
        lines.append(disease["description"])

    recommendations = result.get("recommendations") or []
    if recommendations:
        lines.append("")
        lines.append("Recommendations:")
        for i, item in enumerate(recommendations, 1):
            lines.append(f"  {i}. {item}")

    return "\n".join(lines)


def _request_otp(client, phone, otp=None, prompt=None):
    client.send_otp(phone)
    print(f"📱 OTP sent to {format_phone_display(phone.strip())}")
    if otp:
        return otp
    return (prompt or input)(f"Enter the {client.otp_length}-digit OTP: ").strip()


def sign_up(client, session, name, phone, otp=None, prompt=None):
    code = _request_otp(client, phone, otp, prompt)
    result = client.signup(name, phone, code)
    session.login(result["user"])
    return result["user"]


def sign_in(client, session, phone, otp=None, prompt=None):
    code = _request_otp(client, phone, otp, prompt)
    result = client.signin(phone, code)
    session.login(result["user"])
    return result["user"]


def scan(client, session, image_path):
    if session.resolve_route(SCAN) != SCAN:
        raise ClientValidationError("Please sign in before scanning")
    result = client.analyze_image(image_path)
    session.record_scan(result)
    return result


def build_parser():
    parser = argparse.ArgumentParser(prog="plantcare-cli", description="PlantCare AI command-line client")
    parser.add_argument("--api-url", default=None, help="API base URL (default: $PLANTCARE_API_URL)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("health", help="Check that the API is running")
    subparsers.add_parser("history", help="Show scan history")

    signup_parser = subparsers.add_parser("signup", help="Create an account")
    signup_parser.add_argument("--name", required=True)
    signup_parser.add_argument("--phone", required=True)
    signup_parser.add_argument("--otp", default=None)

    signin_parser = subparsers.add_parser("signin", help="Sign in to an account")
    signin_parser.add_argument("--phone", required=True)
    signin_parser.add_argument("--otp", default=None)

    scan_parser = subparsers.add_parser("scan", help="Sign in and diagnose a plant photo")
    scan_parser.add_argument("image")
    scan_parser.add_argument("--phone", required=True)
    scan_parser.add_argument("--otp", default=None)

    return parser


def main(argv=None, client=None):
    args = build_parser().parse_args(argv)
    client = client or PlantCareClient(base_url=args.api_url)
    session = ClientSession()

    try:
        if args.command == "health":
            status = client.health()
            print(f"✅ {status.get('message', 'API is running')}")
        elif args.command == "history":
            history = client.scan_history()
            scans = history.get("scans") or []
            print(history.get("message") or f"{len(scans)} scans")
        elif args.command == "signup":
            user = sign_up(client, session, args.name, args.phone, args.otp)
            print(f"✅ Welcome, {user['name']}! (id {user['id']})")
        elif args.command == "signin":
            user = sign_in(client, session, args.phone, args.otp)
            print(f"✅ Welcome back, {user['name']}! (id {user['id']})")
        elif args.command == "scan":
            sign_in(client, session, args.phone, args.otp)
            print("🌿 Analyzing your plant...")
            scan(client, session, args.image)
            if session.resolve_route(RESULT) == RESULT:
                print(render_result(session.last_scan_result))
    except ClientValidationError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2
    except ApiError as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n⚠️  Interrupted by user", file=sys.stderr)
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
