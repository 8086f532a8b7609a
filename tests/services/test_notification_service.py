from __future__ import annotations

import pytest

from src.unibus_admin.unibus_admin.core.enums import NotificationType
from src.unibus_admin.unibus_admin.core.exceptions import ValidationError
from src.unibus_admin.unibus_admin.notifications.model import Notification
from src.unibus_admin.unibus_admin.notifications.service import NotificationService

NOTIFICATIONS = [
    Notification(id=1, title="Feriado", message="Sem aulas", type=NotificationType.INFO, created_at="2025-03-01"),
    Notification(id=2, title="Atraso", message="Rota 2", type=NotificationType.URGENT, target_ids=(5,), created_at="2025-03-03"),
    Notification(id=3, title="Pagamento", message="Vence dia 10", type=NotificationType.WARNING, target_ids=(6,), read_by=(6,), created_at="2025-03-02"),
]


class FakeNotificationsRepo:
    def __init__(self, items=NOTIFICATIONS):
        self.items = list(items)
        self.created = []
        self.list_calls = []
        self.read = []

    def list(self, **params):
        self.list_calls.append(params)
        return self.items

    def get_by_id(self, item_id):
        return None

    def create(self, data):
        self.created.append(data)
        return None

    def update(self, item_id, data):
        return None

    def delete(self, item_id):
        return None

    def mark_as_read(self, item_id):
        self.read.append(item_id)
        return None


def test_create_parses_target_ids(cache):
    repo = FakeNotificationsRepo()

    NotificationService(repo, cache).create(title="Aviso", message="Texto", type="warning", target_ids=["3, 1;2", 3])

    assert repo.created[0]["target_ids"] == [1, 2, 3]
    assert repo.created[0]["type"] == NotificationType.WARNING


def test_create_without_targets_is_broadcast_info(cache):
    repo = FakeNotificationsRepo()

    NotificationService(repo, cache).create(title="Aviso", message="Texto")

    assert repo.created[0]["target_ids"] == []
    assert repo.created[0]["type"] == NotificationType.INFO


@pytest.mark.parametrize(
    "form",
    [
        {"title": "", "message": "Texto"},
        {"title": "Aviso", "message": " "},
        {"title": "Aviso", "message": "Texto", "type": "spam"},
        {"title": "Aviso", "message": "Texto", "target_ids": ["abc"]},
    ],
)
def test_invalid_notifications(cache, form):
    with pytest.raises(ValidationError):
        NotificationService(FakeNotificationsRepo(), cache).create(**form)


def test_list_filters_by_type_value(cache):
    repo = FakeNotificationsRepo()

    NotificationService(repo, cache).list(type="urgent", target_id="5")

    assert repo.list_calls == [{"type": "urgent", "targetId": 5}]


def test_student_sees_broadcasts_and_own_notifications(cache):
    service = NotificationService(FakeNotificationsRepo(), cache)

    assert [n.id for n in service.for_student(5)] == [1, 2]
    assert [n.id for n in service.for_student(6)] == [1, 3]


def test_recent_is_newest_first(cache):
    assert [n.id for n in NotificationService(FakeNotificationsRepo(), cache).recent(2)] == [2, 3]


def test_counts_per_user():
    counts = NotificationService.counts(NOTIFICATIONS, user_id=6)

    assert (counts.total, counts.unread, counts.urgent, counts.info) == (3, 2, 1, 1)


def test_mark_as_read_invalidates_lists(cache):
    repo = FakeNotificationsRepo()
    service = NotificationService(repo, cache)
    service.list()

    service.mark_as_read("2")

    assert repo.read == [2]
    assert len(cache) == 0
