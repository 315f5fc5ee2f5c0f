"""
Shared fixtures for the Discord MCP tests.
"""

import pytest

from fakes import make_bot, make_client, make_guild, make_message, make_text_channel


@pytest.fixture
def guild():
    return make_guild(1, "Test Server")


@pytest.fixture
def general(guild):
    messages = [
        make_message(303, "third", author_name="carol", minutes=3, attachments=["https://cdn/c1.png", "https://cdn/c2.png"]),
        make_message(302, "second", author_name="bob", author_id=2000, minutes=2),
        make_message(301, "first", minutes=1, attachments=["https://cdn/a1.png"]),
    ]
    channel = make_text_channel(42, "general", guild=guild, messages=messages)
    guild.channels.append(channel)
    return channel


@pytest.fixture
def client(guild, general):
    return make_client(guilds=[guild], channels=[general])


@pytest.fixture
def bot(client):
    return make_bot(client)
