"""
Main entry point for the Profile Collection service.

    python main.py          # run the API server (uvicorn)
    python main.py demo     # walk through issue -> submit -> list in the console
"""

import argparse

from sqlmodel import Session

from config.settings import settings
from services import ProfileService, TokenRegistry
from services.errors import ValidationError
from utils.database import get_engine, init_db


def serve():
    import uvicorn

    uvicorn.run("api.main:app", host=settings.API_HOST, port=settings.API_PORT)


def demo():
    print("=" * 80)
    print("Profile Collection - Console Demo")
    print("=" * 80)
    print()

    engine = get_engine()
    init_db(engine)
    registry = TokenRegistry()

    recipient = input("Recipient email: ").strip() or "alice@example.com"
    record = registry.issue(recipient)
    print(f"\nIssued token {record.token}")
    print(f"Expires at {record.expires_at.isoformat()} UTC\n")

    fields = {
        "recipientEmail": record.recipient_email,
        "fullName": input("Full name: ").strip(),
        "companyStatus": input("Still with your company? (yes/no): ").strip(),
        "currentRole": input("Current role: ").strip(),
        "companyName": input("Company: ").strip(),
        "experienceYears": input("Years of experience: ").strip(),
        "newSkills": input("Skills: ").strip(),
    }

    with Session(engine) as db_session:
        service = ProfileService(db_session)
        try:
            profile = service.submit(record.token, fields)
        except ValidationError as e:
            print(f"\nSubmission rejected: {e.message}")
            return
        registry.mark_used(record.token)

        print("\n" + "=" * 80)
        print(f"Saved profile {profile.id}")
        print("=" * 80)

        for i, p in enumerate(service.list_profiles(), 1):
            print(f"\n{i}. {p.full_name} <{p.email or 'no email'}>")
            print(f"   Role: {p.current_position or 'unknown'} at {p.company_name or 'unknown'}")
            print(f"   Still there: {p.company_status}")
            print(f"   Experience: {p.experience or 'unknown'}")
            print(f"   Submitted: {p.submitted_at.isoformat()}  Updated: {p.updated_at.isoformat()}")


def main():
    parser = argparse.ArgumentParser(description="Profile Collection service")
    parser.add_argument("command", nargs="?", default="serve", choices=["serve", "demo"])
    args = parser.parse_args()

    if args.command == "demo":
        demo()
    else:
        serve()


if __name__ == "__main__":
    main()
