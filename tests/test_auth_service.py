"""Service-level tests for account registration and login."""

import asyncio

from argon2 import PasswordHasher

from pitchscore.services import auth as auth_service


class TestPasswordHashingConcurrency:
    async def test_event_loop_keeps_running_while_hashing(self, db_session, api_settings):
        """Other coroutines are served while argon2 runs at production cost."""
        # argon2-cffi defaults: time_cost=3, memory_cost=64 MiB, parallelism=4
        hasher = PasswordHasher()
        loop = asyncio.get_running_loop()
        gaps = []
        done = asyncio.Event()

        async def ticker():
            last = loop.time()
            while not done.is_set():
                await asyncio.sleep(0.001)
                now = loop.time()
                gaps.append(now - last)
                last = now

        task = asyncio.create_task(ticker())
        try:
            for n in range(3):
                await auth_service.register_user(
                    db_session, api_settings, hasher, f"user{n}@x.com", "password1"
                )
            result = await auth_service.authenticate_user(
                db_session, api_settings, hasher, "user0@x.com", "password1"
            )
        finally:
            done.set()
            await task

        assert result.email == "user0@x.com"
        assert len(gaps) > 10
        assert max(gaps) < 0.05
