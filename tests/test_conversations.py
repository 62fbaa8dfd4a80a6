import pytest

from skillbridge.core.config import get_settings
from skillbridge.modules.common.exceptions import NotAllowedError, ValidationError
from skillbridge.modules.conversations import ConversationNotFoundError, ConversationService
from skillbridge.modules.users import UserNotFoundError


async def test_open_returns_one_conversation_per_pair(session, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    chat = ConversationService.with_session(session)

    first = await chat.open(alice.id, bob.id)
    second = await chat.open(bob.id, alice.id)

    assert first.id == second.id
    assert set(first.participants) == {alice.id, bob.id}
    assert first.other_user.name == "Bob"
    assert second.other_user.name == "Alice"
    assert first.last_message is None
    assert first.unread_count == 0


async def test_open_validates_the_other_user(session, make_user):
    alice = await make_user()
    chat = ConversationService.with_session(session)

    with pytest.raises(ValidationError):
        await chat.open(alice.id, alice.id)
    with pytest.raises(ValidationError):
        await chat.open(alice.id, "")
    with pytest.raises(UserNotFoundError):
        await chat.open(alice.id, "00000000-0000-0000-0000-000000000000")


async def test_send_then_mark_read_clears_unread_count(session, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    chat = ConversationService.with_session(session)
    conversation = await chat.open(alice.id, bob.id)

    await chat.send(alice.id, conversation.id, "  Hi Bob ")
    message = await chat.send(alice.id, conversation.id, "Free on Friday?")

    assert message.sender_id == alice.id
    assert message.recipient_id == bob.id
    assert message.read is False
    [listed] = await chat.list_for(bob.id)
    assert listed.unread_count == 2
    assert listed.last_message.text == "Free on Friday?"
    assert (await chat.list_for(alice.id))[0].unread_count == 0

    assert await chat.mark_read(bob.id, conversation.id) == 2
    assert await chat.mark_read(bob.id, conversation.id) == 0
    assert (await chat.list_for(bob.id))[0].unread_count == 0

    page = await chat.list_messages(alice.id, conversation.id)
    assert [item.text for item in page.messages] == ["Hi Bob", "Free on Friday?"]
    assert all(item.read for item in page.messages)
    assert page.has_more is False


async def test_only_participants_can_use_a_conversation(session, make_user):
    alice = await make_user()
    bob = await make_user()
    mallory = await make_user()
    chat = ConversationService.with_session(session)
    conversation = await chat.open(alice.id, bob.id)

    with pytest.raises(NotAllowedError):
        await chat.list_messages(mallory.id, conversation.id)
    with pytest.raises(NotAllowedError):
        await chat.send(mallory.id, conversation.id, "hello")
    with pytest.raises(NotAllowedError):
        await chat.mark_read(mallory.id, conversation.id)
    with pytest.raises(ConversationNotFoundError):
        await chat.send(alice.id, "missing", "hello")


async def test_send_rejects_blank_and_oversized_text(session, make_user):
    alice = await make_user()
    bob = await make_user()
    chat = ConversationService.with_session(session)
    conversation = await chat.open(alice.id, bob.id)
    max_length = get_settings().chat.max_message_length

    with pytest.raises(ValidationError):
        await chat.send(alice.id, conversation.id, "   ")
    with pytest.raises(ValidationError):
        await chat.send(alice.id, conversation.id, "x" * (max_length + 1))
    assert (await chat.list_messages(alice.id, conversation.id)).messages == []


async def test_messages_page_backwards_and_read_oldest_first(session, make_user):
    alice = await make_user()
    bob = await make_user()
    chat = ConversationService.with_session(session)
    conversation = await chat.open(alice.id, bob.id)
    for index in range(5):
        await chat.send(alice.id, conversation.id, f"m{index}")

    newest = await chat.list_messages(bob.id, conversation.id, limit=2)
    older = await chat.list_messages(bob.id, conversation.id, limit=2, before_id=newest.messages[0].id)
    oldest = await chat.list_messages(bob.id, conversation.id, limit=2, before_id=older.messages[0].id)

    assert ([m.text for m in newest.messages], newest.has_more) == (["m3", "m4"], True)
    assert ([m.text for m in older.messages], older.has_more) == (["m1", "m2"], True)
    assert ([m.text for m in oldest.messages], oldest.has_more) == (["m0"], False)


async def test_conversations_are_listed_by_latest_activity(session, make_user):
    alice = await make_user()
    bob = await make_user()
    carol = await make_user()
    chat = ConversationService.with_session(session)
    with_bob = await chat.open(alice.id, bob.id)
    with_carol = await chat.open(alice.id, carol.id)

    await chat.send(bob.id, with_bob.id, "ping")

    assert [item.id for item in await chat.list_for(alice.id)] == [with_bob.id, with_carol.id]
    assert [item.id for item in await chat.list_for(carol.id)] == [with_carol.id]
