from before_you_sign.core.db import Base, engine
import before_you_sign.models  # noqa: F401


def main():
    print("⚙️ Dropping and recreating all tables...")
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    print("✅ Database schema refreshed successfully.")


if __name__ == "__main__":
    main()
