"""Tests for the announcement lifecycle use cases."""

from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy import func
from sqlalchemy.exc import OperationalError

from app.application.use_cases.announcements import (
    clear_announcements,
    create_announcement,
    dispatch_announcement,
    list_announcements,
    send_now,
    update_announcement,
)
from app.domain.entities import AnnouncementStatus, Notification
from app.domain.exceptions import DispatchError, NotFoundError, ValidationError
from app.infrastructure.models import AnnouncementModel, NotificationModel
from app.infrastructure.repositories import (
    AnnouncementRepository,
    EventRepository,
    NotificationRepository,
    RegistrationRepository,
)
from app.utils import now_in_app_naive_datetime


def _count(session, model) -> int:
    return session.query(func.count()).select_from(model).scalar()


def _notifications(session):
    session.expire_all()
    return session.query(NotificationModel).order_by(NotificationModel.user_id).all()


def test_create_sent_announcement_fans_out_to_registrants(db_session, make_event):
    event_id = make_event("Concert", registrants=(7, 9))

    result = create_announcement(
        db_session,
        created_by=1,
        title="Reminder",
        message="Doors open at 6pm",
        event_id=event_id,
        status="sent",
    )

    assert result.sent is not None
    assert result.sent.as_dict() == {"inserted": 2, "requested": 2}
    assert result.announcement.status is AnnouncementStatus.SENT
    assert result.announcement.sent_at is not None

    rows = _notifications(db_session)
    assert [row.user_id for row in rows] == [7, 9]
    assert all(row.status == "sent" for row in rows)
    assert all(row.is_read is False for row in rows)
    assert all(row.announcement_id == result.announcement.id for row in rows)
    assert all(row.type == "in-app" for row in rows)


def test_create_with_mark_sent_dispatches_a_draft(db_session, make_event):
    event_id = make_event("Expo", registrants=(3,))

    result = create_announcement(
        db_session,
        created_by=1,
        title="Welcome",
        message="See you there",
        event_id=event_id,
        mark_sent=True,
    )

    assert result.sent.as_dict() == {"inserted": 1, "requested": 1}
    assert result.announcement.status is AnnouncementStatus.SENT


def test_create_draft_by_default_without_dispatch(db_session, make_event):
    event_id = make_event("Expo", registrants=(3, 4))

    result = create_announcement(
        db_session, created_by=1, title="Draft", message="Not yet", event_id=event_id
    )

    assert result.sent is None
    assert result.announcement.status is AnnouncementStatus.DRAFT
    assert _count(db_session, NotificationModel) == 0


@pytest.mark.parametrize(("title", "message"), [(None, "body"), ("title", None), ("  ", "body")])
def test_create_requires_title_and_message(db_session, title, message):
    with pytest.raises(ValidationError):
        create_announcement(db_session, created_by=1, title=title, message=message)
    assert _count(db_session, AnnouncementModel) == 0


def test_create_scheduled_without_timestamp_fails_without_row(db_session):
    with pytest.raises(ValidationError):
        create_announcement(
            db_session, created_by=1, title="Later", message="Soon", status="Scheduled"
        )
    assert _count(db_session, AnnouncementModel) == 0


def test_create_scheduled_with_unparseable_timestamp_fails(db_session):
    with pytest.raises(ValidationError):
        create_announcement(
            db_session,
            created_by=1,
            title="Later",
            message="Soon",
            status="scheduled",
            scheduled_at="next tuesday",
        )
    assert _count(db_session, AnnouncementModel) == 0


def test_create_scheduled_in_the_past_fails(db_session):
    past = (now_in_app_naive_datetime() - timedelta(days=1)).isoformat()
    with pytest.raises(ValidationError):
        create_announcement(
            db_session,
            created_by=1,
            title="Later",
            message="Soon",
            status="scheduled",
            scheduled_at=past,
        )


def test_create_scheduled_does_not_dispatch(db_session, make_event):
    event_id = make_event("Gala", registrants=(1, 2))

    result = create_announcement(
        db_session,
        created_by=1,
        title="Later",
        message="Soon",
        event_id=event_id,
        status="scheduled",
        scheduled_at="2099-01-01T00:00:00Z",
    )

    assert result.announcement.status is AnnouncementStatus.SCHEDULED
    assert result.announcement.scheduled_at.year == 2099
    assert _count(db_session, NotificationModel) == 0


def test_create_sent_for_event_without_registrants(db_session, make_event):
    event_id = make_event("Empty Hall")

    result = create_announcement(
        db_session, created_by=1, title="Hi", message="Anyone?", event_id=event_id, status="Sent"
    )

    assert result.sent.as_dict() == {"inserted": 0, "requested": 0}
    assert result.announcement.status is AnnouncementStatus.SENT


def test_update_draft_to_scheduled_produces_no_notifications(db_session, make_event):
    event_id = make_event("Gala", registrants=(1, 2))
    draft = create_announcement(
        db_session, created_by=1, title="Later", message="Soon", event_id=event_id
    ).announcement

    result = update_announcement(
        db_session,
        announcement_id=draft.id,
        updated_by=1,
        changes={"status": "scheduled", "scheduled_at": "2099-01-01T00:00:00Z"},
    )

    assert result.announcement.status is AnnouncementStatus.SCHEDULED
    assert result.sent is None
    assert _count(db_session, NotificationModel) == 0


def test_update_to_scheduled_requires_timestamp(db_session):
    draft = create_announcement(
        db_session, created_by=1, title="Later", message="Soon"
    ).announcement

    with pytest.raises(ValidationError):
        update_announcement(
            db_session, announcement_id=draft.id, updated_by=1, changes={"status": "Scheduled"}
        )

    db_session.expire_all()
    assert AnnouncementRepository(db_session).get(draft.id).status is AnnouncementStatus.DRAFT


def test_update_applies_only_provided_fields(db_session):
    draft = create_announcement(
        db_session, created_by=1, title="Original", message="Body"
    ).announcement

    result = update_announcement(
        db_session, announcement_id=draft.id, updated_by=2, changes={"title": "Renamed"}
    )

    assert result.announcement.title == "Renamed"
    assert result.announcement.message == "Body"
    assert result.announcement.status is AnnouncementStatus.DRAFT


def test_update_to_sent_dispatches_once(db_session, make_event):
    event_id = make_event("Fair", registrants=(4, 5, 6))
    draft = create_announcement(
        db_session, created_by=1, title="News", message="Big news", event_id=event_id
    ).announcement

    first = update_announcement(
        db_session, announcement_id=draft.id, updated_by=1, changes={"status": "Sent"}
    )
    second = update_announcement(
        db_session, announcement_id=draft.id, updated_by=1, changes={"status": "sent"}
    )

    assert first.sent.as_dict() == {"inserted": 3, "requested": 3}
    assert first.announcement.sent_at is not None
    assert second.sent is None
    assert second.announcement.sent_at == first.announcement.sent_at
    assert _count(db_session, NotificationModel) == 3


def test_update_rejects_leaving_sent(db_session, make_event):
    event_id = make_event("Fair", registrants=(4,))
    sent = create_announcement(
        db_session, created_by=1, title="News", message="Out", event_id=event_id, status="sent"
    ).announcement

    for target in ("draft", "scheduled"):
        with pytest.raises(ValidationError):
            update_announcement(
                db_session,
                announcement_id=sent.id,
                updated_by=1,
                changes={"status": target, "scheduled_at": "2099-01-01T00:00:00Z"},
            )

    db_session.expire_all()
    assert AnnouncementRepository(db_session).get(sent.id).status is AnnouncementStatus.SENT


def test_update_unknown_id_raises_not_found(db_session):
    with pytest.raises(NotFoundError):
        update_announcement(
            db_session, announcement_id=999, updated_by=1, changes={"title": "x"}
        )
    assert _count(db_session, AnnouncementModel) == 0


def test_update_materializes_announcement_from_legacy_notification(db_session, make_event):
    event_id = make_event("Legacy", registrants=(11, 12))
    legacy = NotificationRepository(db_session).create(
        Notification(
            id=None,
            user_id=11,
            event_id=event_id,
            title="Old title",
            message="Old message",
            status="pending",
        )
    )

    result = update_announcement(
        db_session,
        announcement_id=legacy.id,
        updated_by=3,
        changes={"message": "Fresh message"},
    )

    assert result.materialized_from == legacy.id
    assert result.announcement.event_id == event_id
    assert result.announcement.title == "Old title"
    assert result.announcement.message == "Fresh message"
    assert result.announcement.created_by == 3
    assert _count(db_session, AnnouncementModel) == 1


def test_materialized_announcement_can_be_sent(db_session, make_event):
    event_id = make_event("Legacy", registrants=(11, 12))
    legacy = NotificationRepository(db_session).create(
        Notification(
            id=None, user_id=11, event_id=event_id, title="T", message="M", status="pending"
        )
    )

    result = update_announcement(
        db_session, announcement_id=legacy.id, updated_by=3, changes={"status": "Sent"}
    )

    assert result.sent.as_dict() == {"inserted": 2, "requested": 2}
    assert result.announcement.status is AnnouncementStatus.SENT


def test_failed_materialization_update_leaves_no_row(db_session):
    legacy = NotificationRepository(db_session).create(
        Notification(id=None, user_id=1, event_id=None, title="T", message="M")
    )

    with pytest.raises(ValidationError):
        update_announcement(
            db_session, announcement_id=legacy.id, updated_by=3, changes={"status": "scheduled"}
        )

    assert _count(db_session, AnnouncementModel) == 0


def test_redispatching_a_sent_announcement_is_a_no_op(db_session, make_event):
    event_id = make_event("Race", registrants=(1, 2))
    sent = create_announcement(
        db_session, created_by=1, title="Go", message="Now", event_id=event_id, status="sent"
    ).announcement

    assert dispatch_announcement(db_session, sent, dispatched_by=1) is None
    assert _count(db_session, NotificationModel) == 2


def test_send_now_resolves_event_by_title(db_session, make_event):
    make_event("Book Club", registrants=(21, 22, 22))

    result = send_now(
        db_session, created_by=5, title="Chapter 3", message="Read it", event_title="Book Club"
    )

    assert result.as_dict() == {"inserted": 2, "requested": 2}
    rows = _notifications(db_session)
    assert {row.status for row in rows} == {"sent"}
    assert {row.scheduled_by for row in rows} == {5}
    assert all(row.announcement_id is None for row in rows)


def test_send_now_unknown_event_sends_nothing(db_session):
    result = send_now(
        db_session,
        created_by=5,
        title="Hello",
        message="Anyone",
        event_title="Nonexistent Event",
    )

    assert result.as_dict() == {"inserted": 0, "requested": 0}


def test_send_now_without_mark_sent_stores_pending_rows(db_session, make_event):
    event_id = make_event("Workshop", registrants=(8,))

    send_now(
        db_session, created_by=5, title="Prep", message="Bring laptops", event_id=event_id, mark_sent=False
    )

    rows = _notifications(db_session)
    assert [(row.status, row.sent_at) for row in rows] == [("pending", None)]


def test_resolve_event_id_rules(db_session, make_event):
    event_id = make_event("Jazz Night")
    repository = EventRepository(db_session)

    assert repository.resolve_event_id(event_id="12") == 12
    assert repository.resolve_event_id(event_id=3, event_title="Jazz Night") == 3
    assert repository.resolve_event_id(event_title=" Jazz Night ") == event_id
    assert repository.resolve_event_id(event_title="42") == 42
    assert repository.resolve_event_id(event_title="Unknown") is None
    assert repository.resolve_event_id() is None


def test_list_announcements_groups_notification_rows(db_session, make_event):
    event_id = make_event("Fest", registrants=(1, 2))
    create_announcement(
        db_session, created_by=1, title="Sent one", message="A", event_id=event_id, status="sent"
    )
    send_now(
        db_session, created_by=1, title="Pending one", message="B", event_id=event_id, mark_sent=False
    )

    views = list_announcements(db_session)

    assert [view.title for view in views] == ["Pending one", "Sent one"]
    statuses = {view.title: view.status for view in views}
    assert statuses == {
        "Sent one": AnnouncementStatus.SENT,
        "Pending one": AnnouncementStatus.DRAFT,
    }
    sent_view = next(view for view in views if view.title == "Sent one")
    assert sent_view.sent_at is not None
    assert sent_view.event_id == event_id


def test_clear_announcements_keeps_notifications(db_session, make_event):
    event_id = make_event("Fest", registrants=(1, 2))
    create_announcement(
        db_session, created_by=1, title="One", message="A", event_id=event_id, status="sent"
    )
    create_announcement(db_session, created_by=1, title="Two", message="B")

    assert clear_announcements(db_session) == 2
    assert _count(db_session, AnnouncementModel) == 0
    assert _count(db_session, NotificationModel) == 2


def _legacy_notification(session, *, title, event_id=None, user_id=1):
    return NotificationRepository(session).create(
        Notification(id=None, user_id=user_id, event_id=event_id, title=title, message=f"{title} body")
    )


def test_repeated_updates_of_a_legacy_id_reuse_one_announcement(db_session):
    _legacy_notification(db_session, title="First")
    _legacy_notification(db_session, title="Second")
    third = _legacy_notification(db_session, title="Third")

    first = update_announcement(
        db_session, announcement_id=third.id, updated_by=2, changes={"message": "Edited"}
    )
    second = update_announcement(
        db_session, announcement_id=third.id, updated_by=2, changes={"title": "Third, renamed"}
    )

    assert first.materialized_from == third.id
    assert second.materialized_from is None
    assert second.announcement.id == first.announcement.id
    assert second.announcement.title == "Third, renamed"
    assert second.announcement.message == "Edited"
    assert second.announcement.source_notification_id == third.id
    assert _count(db_session, AnnouncementModel) == 1


def test_legacy_id_colliding_with_a_seeded_announcement_is_materialized(db_session):
    first = _legacy_notification(db_session, title="First")
    _legacy_notification(db_session, title="Second")
    third = _legacy_notification(db_session, title="Third")
    seeded = update_announcement(
        db_session, announcement_id=third.id, updated_by=2, changes={"message": "Edited"}
    ).announcement
    assert seeded.id == first.id

    result = update_announcement(
        db_session, announcement_id=first.id, updated_by=2, changes={"message": "Also edited"}
    )

    assert result.materialized_from == first.id
    assert result.announcement.id != seeded.id
    assert result.announcement.title == "First"
    db_session.expire_all()
    untouched = AnnouncementRepository(db_session).get(seeded.id)
    assert untouched.title == "Third"
    assert untouched.message == "Edited"
    assert _count(db_session, AnnouncementModel) == 2


def test_dispatched_notification_id_resolves_to_its_announcement(db_session, make_event):
    event_id = make_event("Fair", registrants=(4, 5))
    create_announcement(
        db_session, created_by=1, title="Earlier", message="Out", event_id=event_id, status="sent"
    )
    later = create_announcement(
        db_session, created_by=1, title="Later", message="Out", event_id=event_id, status="sent"
    ).announcement
    view = next(item for item in list_announcements(db_session) if item.title == "Later")
    assert AnnouncementRepository(db_session).get(view.announcement_id) is None

    result = update_announcement(
        db_session, announcement_id=view.announcement_id, updated_by=1, changes={"title": "Later!"}
    )

    assert result.materialized_from is None
    assert result.announcement.id == later.id
    assert result.announcement.title == "Later!"
    assert _count(db_session, AnnouncementModel) == 2


def test_unknown_event_id_sends_nothing_with_foreign_keys_enforced(
    db_session, enforce_foreign_keys
):
    result = create_announcement(
        db_session, created_by=1, title="Hello", message="Anyone", event_id=999, status="sent"
    )

    assert result.sent.as_dict() == {"inserted": 0, "requested": 0}
    assert result.announcement.status is AnnouncementStatus.SENT
    assert result.announcement.event_id == 999


def test_failed_immediate_dispatch_leaves_no_announcement(db_session, make_event, monkeypatch):
    event_id = make_event("Fair", registrants=(4,))

    def broken_lookup(self, event_id):
        raise OperationalError("SELECT user_id FROM registrations", {}, Exception("db down"))

    monkeypatch.setattr(RegistrationRepository, "list_recipient_ids", broken_lookup)

    with pytest.raises(DispatchError):
        create_announcement(
            db_session, created_by=1, title="News", message="Out", event_id=event_id, status="sent"
        )

    assert _count(db_session, AnnouncementModel) == 0
    assert _count(db_session, NotificationModel) == 0
