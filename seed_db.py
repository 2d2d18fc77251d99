import asyncio

from pitchscore.config import get_settings
from pitchscore.database import build_engine, build_sessionmaker, create_tables
from pitchscore.models.idea import Idea
from pitchscore.models.user import User
from pitchscore.services.analysis import generate_analysis
from pitchscore.services.security import build_password_hasher, hash_password

DEMO_PASSWORD = "password1"

DEMO_IDEAS = {
    "alice@example.com": [
        ("Campus food swap", "An app where students trade leftover meal-plan credits."),
        ("Lab booking bot", "A chat bot that books shared lab equipment and sends reminders."),
    ],
    "bob@example.com": [
        ("Repair café finder", "Map of local repair events with volunteer sign-up."),
    ],
}


async def async_main():
    settings = get_settings()
    engine = build_engine(settings)
    await create_tables(engine)
    async_session = build_sessionmaker(engine)
    hasher = build_password_hasher(settings)

    async with async_session() as session:
        for email, ideas in DEMO_IDEAS.items():
            user = User(email=email, password_hash=await hash_password(hasher, DEMO_PASSWORD))
            session.add(user)
            await session.flush()

            for title, content in ideas:
                analysis = generate_analysis(title, content)
                session.add(Idea(
                    user_id=user.id,
                    title=title,
                    content=content,
                    analysis_json=analysis.model_dump_json(),
                ))

        await session.commit()

    await engine.dispose()
    print(f"Database seeded with {len(DEMO_IDEAS)} demo users (password: {DEMO_PASSWORD}).")


if __name__ == "__main__":
    asyncio.run(async_main())
