import pytest

from skillbridge.modules.common.exceptions import ValidationError
from skillbridge.modules.users import (
    CertificationInput,
    DuplicateSkillError,
    ProfileItemNotFoundError,
    ProfileUpdateInput,
    UserAlreadyExistsError,
    UserCreateInput,
    UserService,
)


async def test_register_and_authenticate(session):
    users = UserService.with_session(session)
    user = await users.register(UserCreateInput(name=" Ada ", email="Ada@Example.com", password="secret123"))

    assert user.name == "Ada"
    assert user.email == "ada@example.com"
    assert user.password_hash and user.password_hash != "secret123"
    assert (await users.authenticate("ADA@example.com", "secret123")).id == user.id
    assert await users.authenticate("ada@example.com", "wrong-password") is None
    assert await users.authenticate("nobody@example.com", "secret123") is None

    with pytest.raises(UserAlreadyExistsError):
        await users.register(UserCreateInput(name="Other", email="ada@example.com", password="secret123"))


async def test_profile_update_touches_only_given_fields(session, make_user):
    user = await make_user("Linus")
    users = UserService.with_session(session)

    updated = await users.update_profile(
        user.id, ProfileUpdateInput(bio="  Kernel hacker ", languages=["English", " ", "Finnish"])
    )
    assert updated.bio == "Kernel hacker"
    assert updated.languages == ["English", "Finnish"]
    assert updated.name == "Linus"

    updated = await users.update_profile(user.id, ProfileUpdateInput(location="Portland"))
    assert updated.location == "Portland"
    assert updated.bio == "Kernel hacker"

    with pytest.raises(ValidationError):
        await users.update_profile(user.id, ProfileUpdateInput(name="  "))


async def test_teaching_skills_reject_case_insensitive_duplicates(session, make_user):
    user = await make_user()
    users = UserService.with_session(session)

    profile = await users.add_teaching_skill(user.id, "Spanish")
    with pytest.raises(DuplicateSkillError):
        await users.add_teaching_skill(user.id, "spanish")

    skill = profile.skills_teaching[0]
    assert (skill.name, skill.sessions, skill.rating) == ("Spanish", 0, 0.0)

    profile = await users.remove_teaching_skill(user.id, skill.id)
    assert profile.skills_teaching == []
    with pytest.raises(ProfileItemNotFoundError):
        await users.remove_teaching_skill(user.id, skill.id)


async def test_learning_goals_and_certifications(session, make_user):
    user = await make_user()
    users = UserService.with_session(session)

    profile = await users.add_learning_goal(user.id, "Cooking")
    assert profile.skills_learning == ["Cooking"]
    with pytest.raises(DuplicateSkillError):
        await users.add_learning_goal(user.id, "COOKING")
    profile = await users.remove_learning_goal(user.id, "cooking")
    assert profile.skills_learning == []

    profile = await users.add_certification(
        user.id, CertificationInput(name="AWS SA", issuer="Amazon", year="2024", file_url="https://cdn/x.pdf")
    )
    cert = profile.certifications[0]
    assert (cert.name, cert.issuer, cert.file_url) == ("AWS SA", "Amazon", "https://cdn/x.pdf")
    profile = await users.remove_certification(user.id, cert.id)
    assert profile.certifications == []


async def test_avatar_reference_and_directory_listing(session, make_user):
    me = await make_user("Me")
    other = await make_user("Other")
    users = UserService.with_session(session)

    profile = await users.set_avatar(me.id, "https://cdn/avatar.png", "avatars/me")
    assert profile.avatar_url == "https://cdn/avatar.png"
    profile = await users.clear_avatar(me.id)
    assert profile.avatar_url == ""

    listed = await users.list_users(exclude_id=me.id)
    assert [user.id for user in listed] == [other.id]


async def test_learning_goal_with_non_ascii_capital_can_be_removed(session, make_user):
    user = await make_user()
    users = UserService.with_session(session)

    await users.add_learning_goal(user.id, "Über")
    with pytest.raises(DuplicateSkillError):
        await users.add_learning_goal(user.id, "über")

    profile = await users.remove_learning_goal(user.id, "Über")
    assert profile.skills_learning == []
