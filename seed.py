from sqlmodel import Session, SQLModel

import streakquest.models  # noqa: F401
from streakquest.config import settings
from streakquest.db import build_engine, init_db
from streakquest.logging_config import configure_logging
from streakquest.services.seeding import DEMO_PASSWORD, DEMO_USERS, seed_all

if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    engine = build_engine(settings.DATABASE_URL)
    SQLModel.metadata.drop_all(engine)
    init_db(engine)
    with Session(engine) as session:
        seed_all(session, demo=True)
    print(f"Database seeded. Demo logins: {', '.join(email for email, _, _ in DEMO_USERS)} / {DEMO_PASSWORD}")
