"""Seed a demo account with a handful of links.

Creates user "demo" (password "demodemo") with five links at orders 0-4.
Parts that already exist are left alone.

Usage:
    docker compose exec backend python -m scripts.seed_demo
"""

from sqlalchemy import select

from app.models.base import SyncSessionLocal
from app.models.user import User
from app.models.link import Link
from app.models.user_session import UserSession  # noqa: F401 — needed for relationship resolution
from app.services.credentials import hash_password

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "demodemo"

DEMO_LINKS = [
    ("instagram", "https://instagram.com/alexjohnson", "Instagram"),
    ("youtube", "https://youtube.com/@alexjohnson", "YouTube"),
    ("twitter", "https://twitter.com/alexjohnson", "Twitter"),
    ("store", "https://myshop.com/alexjohnson", "My Shop"),
    ("spotify", "https://open.spotify.com/user/alexjohnson", "Spotify Playlist"),
]


def seed():
    with SyncSessionLocal() as db:
        user = db.execute(select(User).where(User.username == DEMO_USERNAME)).scalar_one_or_none()
        if user is None:
            print("Creating demo user...")
            user = User(
                username=DEMO_USERNAME,
                hashed_password=hash_password(DEMO_PASSWORD),
                display_name="Alex Johnson",
                bio="Digital creator & photographer. Sharing my adventures and creative work through these links!",
            )
            db.add(user)
            db.flush()
            print(f"Demo user created with ID: {user.id}")
        else:
            print(f"Using existing demo user with ID: {user.id}")

        has_links = db.execute(select(Link.id).where(Link.user_id == user.id).limit(1)).first()
        if has_links:
            print("Demo links already exist, skipping...")
        else:
            for order, (platform, url, title) in enumerate(DEMO_LINKS):
                db.add(Link(user_id=user.id, platform=platform, url=url, title=title, active=True, order=order))
            print(f"Created {len(DEMO_LINKS)} demo links")

        db.commit()
    print("Seeding completed")


if __name__ == "__main__":
    seed()
