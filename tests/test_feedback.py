import pytest

from skillbridge.modules.common.exceptions import NotAllowedError, ValidationError
from skillbridge.modules.feedback import DuplicateFeedbackError, FeedbackInput, FeedbackService
from skillbridge.modules.meetings import MeetingService
from skillbridge.modules.users import UserNotFoundError, UserService


async def _completed_session(session, schedule, creator, partner, hours_from_now=-3):
    result = await schedule(creator, partner, session_type="teaching", skill="Piano", hours_from_now=hours_from_now)
    await MeetingService.with_session(session).sweep_expired(creator.id)
    return result.meeting


async def test_feedback_updates_ratee_average_and_session_count(session, make_user, schedule):
    teacher = await make_user("Teacher")
    learner_a = await make_user("Learner A")
    learner_b = await make_user("Learner B")
    first = await _completed_session(session, schedule, teacher, learner_a, hours_from_now=-6)
    second = await _completed_session(session, schedule, teacher, learner_b, hours_from_now=-3)
    feedback = FeedbackService.with_session(session)

    await feedback.submit(FeedbackInput(learner_a.id, teacher.id, "Piano", 5, "Great", first.id))
    record = await feedback.submit(FeedbackInput(learner_b.id, teacher.id, "Piano", 2, None, second.id))
    await feedback.submit(FeedbackInput(learner_b.id, teacher.id, "Piano", 3))

    assert record.comment == ""
    assert record.meeting_id == second.id
    profile = await UserService.with_session(session).require(teacher.id)
    assert profile.stats.avg_rating == 3.3
    assert profile.stats.sessions_taught == 2


async def test_duplicate_feedback_for_same_session_is_rejected(session, make_user, schedule):
    teacher = await make_user()
    learner = await make_user()
    meeting = await _completed_session(session, schedule, teacher, learner)
    feedback = FeedbackService.with_session(session)

    await feedback.submit(FeedbackInput(learner.id, teacher.id, "Piano", 4, meeting_id=meeting.id))
    with pytest.raises(DuplicateFeedbackError):
        await feedback.submit(FeedbackInput(learner.id, teacher.id, "Piano", 5, meeting_id=meeting.id))

    # the other direction is a different triple
    await feedback.submit(FeedbackInput(teacher.id, learner.id, "Piano", 5, meeting_id=meeting.id))


async def test_feedback_requires_both_users_in_the_session(session, make_user, schedule):
    teacher = await make_user()
    learner = await make_user()
    outsider = await make_user()
    meeting = await _completed_session(session, schedule, teacher, learner)
    feedback = FeedbackService.with_session(session)

    with pytest.raises(NotAllowedError):
        await feedback.submit(FeedbackInput(outsider.id, teacher.id, "Piano", 4, meeting_id=meeting.id))
    with pytest.raises(ValidationError):
        await feedback.submit(FeedbackInput(learner.id, outsider.id, "Piano", 4, meeting_id=meeting.id))


@pytest.mark.parametrize("skill, rating", [("", 4), ("Piano", 0), ("Piano", 6)])
async def test_feedback_input_is_validated(session, make_user, skill, rating):
    rater = await make_user()
    ratee = await make_user()
    with pytest.raises(ValidationError):
        await FeedbackService.with_session(session).submit(FeedbackInput(rater.id, ratee.id, skill, rating))


async def test_feedback_for_unknown_user_is_not_found(session, make_user):
    rater = await make_user()
    with pytest.raises(UserNotFoundError):
        await FeedbackService.with_session(session).submit(FeedbackInput(rater.id, "nobody", "Piano", 4))


async def test_received_given_and_pending_lists(session, make_user, schedule):
    teacher = await make_user()
    learner = await make_user()
    rated = await _completed_session(session, schedule, teacher, learner, hours_from_now=-6)
    unrated = await _completed_session(session, schedule, teacher, learner, hours_from_now=-3)
    await schedule(teacher, learner, session_type="teaching", hours_from_now=5)
    feedback = FeedbackService.with_session(session)

    await feedback.submit(FeedbackInput(learner.id, teacher.id, "Piano", 5, meeting_id=rated.id))

    received = await feedback.list_received(teacher.id)
    given = await feedback.list_given(learner.id)
    pending = await feedback.list_pending(learner.id)

    assert [item.from_user_id for item in received] == [learner.id]
    assert [item.to_user_id for item in given] == [teacher.id]
    assert [item.meeting_id for item in pending] == [unrated.id]
    assert pending[0].other_user_id == teacher.id
