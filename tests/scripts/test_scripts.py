"""
Tests for the operator scripts in identikey.scripts
"""

import pytest

from identikey.scripts.create_user import create_user
from identikey.scripts.list_users import list_users


@pytest.mark.asyncio
async def test_create_user_prints_details(app_settings, identity_store, capsys):
    assert await create_user("alice", "secret", settings=app_settings, store=identity_store) is True

    out = capsys.readouterr().out
    assert "User created successfully" in out
    assert "UID: 1" in out
    assert await identity_store.authenticate("alice", "secret") is True


@pytest.mark.asyncio
async def test_create_user_reports_duplicates(app_settings, identity_store, capsys):
    await create_user("alice", "secret", settings=app_settings, store=identity_store)

    assert await create_user("alice", "secret", settings=app_settings, store=identity_store) is False
    assert "USER_ALREADY_EXISTS" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_list_users(app_settings, identity_store, capsys):
    for name in ("alice", "bob"):
        await identity_store.add_user(name, "pw")
    capsys.readouterr()

    assert await list_users(settings=app_settings, store=identity_store) is True

    out = capsys.readouterr().out
    assert out.index("bob") < out.index("alice")
    assert "(uid 1)" in out


@pytest.mark.asyncio
async def test_list_users_empty(app_settings, identity_store, capsys):
    assert await list_users(settings=app_settings, store=identity_store) is True

    assert "No users found." in capsys.readouterr().out
