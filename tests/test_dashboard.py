"""Tests for src.core.dashboard — intents in, view models out."""

from datetime import timedelta

import pytest

from src.core.autosave import AutoSaveState
from src.core.formatting import DueStatus
from src.data.models import Bucket, DeliveryStatus, NoteSort, TaskSort, TaskView


class TestTaskView:
    def test_query_change_recomputes_view(self, dashboard):
        milk = dashboard.tasks.create("Buy milk", due_date="2024-01-14")
        dashboard.tasks.create("Book flights", due_date="2024-02-01")

        view = dashboard.set_task_query(view=TaskView.TODAY)
        assert view.tasks == [milk]
        assert view.counts.all == 2
        assert view.counts.today == 1
        assert view.counts.upcoming == 1
        assert view.due_labels[milk.id].status is DueStatus.TODAY

    def test_search_does_not_change_counts(self, dashboard):
        dashboard.tasks.create("Buy milk")
        dashboard.tasks.create("Walk dog")
        view = dashboard.set_task_query(search="milk", sort=TaskSort.CREATED)
        assert [t.title for t in view.tasks] == ["Buy milk"]
        assert view.counts.all == 2

    def test_query_accepts_string_values(self, dashboard):
        milk = dashboard.tasks.create("Buy milk", due_date="2024-01-14")
        dashboard.tasks.create("Book flights", due_date="2024-02-01")

        view = dashboard.set_task_query(view="today", sort="priority")
        assert dashboard.task_query.view is TaskView.TODAY
        assert dashboard.task_query.sort is TaskSort.PRIORITY
        assert view.tasks == [milk]

    def test_query_rejects_unknown_view(self, dashboard):
        with pytest.raises(ValueError):
            dashboard.set_task_query(view="someday")
        assert dashboard.task_query.view is TaskView.ALL

    def test_undated_task_has_no_due_label(self, dashboard):
        task = dashboard.tasks.create("Someday")
        assert dashboard.task_view().due_labels[task.id] is None


class TestNoteView:
    def test_tags_and_tag_toggle(self, dashboard):
        both = dashboard.notes.create("Both", tags=["a", "b"])
        dashboard.notes.create("Only b", tags=["b"])

        view = dashboard.toggle_selected_tag("a")
        assert view.notes == [both]
        assert view.tags == ["a", "b"]

        view = dashboard.toggle_selected_tag("a")
        assert len(view.notes) == 2

    def test_note_sort_accepts_string_value(self, dashboard):
        dashboard.notes.create("beta")
        dashboard.notes.create("Alpha")
        view = dashboard.set_note_query(sort="alphabetical")
        assert dashboard.note_query.sort is NoteSort.ALPHABETICAL
        assert [n.title for n in view.notes] == ["Alpha", "beta"]

    def test_previews_and_word_counts(self, dashboard):
        note = dashboard.notes.create("Long", content="word " * 100)
        view = dashboard.set_note_query(sort=NoteSort.ALPHABETICAL)
        assert view.previews[note.id].endswith("...")
        assert view.word_counts[note.id] == 100
        assert view.edited_labels[note.id] == "10:00"

    def test_autosave_flow(self, dashboard, timers):
        note = dashboard.notes.create("Draft")
        assert dashboard.open_note(note.id) is True
        dashboard.edit_note("Draft", "hello", [])
        assert dashboard.note_view().autosave is AutoSaveState.PENDING

        timers.advance(2.0)
        view = dashboard.note_view()
        assert view.autosave is AutoSaveState.SAVED
        assert view.editing_id == note.id
        assert note.content == "hello"

    def test_delete_note_cancels_pending_autosave(self, dashboard, timers):
        note = dashboard.notes.create("Draft")
        dashboard.open_note(note.id)
        dashboard.edit_note("Draft", "unsaved", [])

        assert dashboard.delete_note(note.id) is True
        assert len(timers) == 0
        timers.advance(5)
        assert timers.results == []
        assert dashboard.note_view().editing_id is None

    def test_switching_notes_closes_previous(self, dashboard, timers):
        first = dashboard.notes.create("First")
        second = dashboard.notes.create("Second")
        dashboard.open_note(first.id)
        dashboard.edit_note("First", "lost", [])
        dashboard.open_note(second.id)
        timers.advance(5)
        assert first.content == ""

    def test_save_note_button(self, dashboard):
        note = dashboard.notes.create("Draft")
        dashboard.open_note(note.id)
        dashboard.edit_note("Renamed", "body", ["tag"])
        assert dashboard.save_note() is True
        assert note.title == "Renamed"
        assert note.tags == ["tag"]

    def test_edit_without_open_note(self, dashboard):
        assert dashboard.edit_note("t", "c", []) is False
        assert dashboard.save_note() is False


class TestChatView:
    def test_send_scenario(self, dashboard, timers):
        dashboard.chat.create_thread("Current Conversation")
        dashboard.chat.set_draft("hi")
        assert dashboard.chat_view().can_send is True

        dashboard.chat.send_message()
        view = dashboard.chat_view()
        assert len(view.messages) == 1
        assert view.messages[0].status is DeliveryStatus.SENDING
        assert view.typing is True
        assert view.draft_length == 0

        timers.advance(1.0)
        assert dashboard.chat_view().messages[0].status is DeliveryStatus.SENT

        timers.advance(1.0)
        view = dashboard.chat_view()
        assert len(view.messages) == 2
        assert view.typing is False

    def test_buckets_and_search(self, dashboard, clock):
        now = clock.now
        dashboard.chat.create_thread("Current Conversation", updated_at=now)
        dashboard.chat.create_thread("Help with React Hooks", updated_at=now - timedelta(days=1))
        dashboard.chat.create_thread("CSS Grid Layout Questions", updated_at=now - timedelta(days=2))

        view = dashboard.chat_view()
        assert list(view.buckets) == [Bucket.TODAY, Bucket.YESTERDAY, Bucket.LAST_WEEK]

        view = dashboard.search_threads("css")
        assert list(view.buckets) == [Bucket.LAST_WEEK]
        assert view.active_thread_id is not None

    def test_empty_chat(self, dashboard):
        view = dashboard.chat_view()
        assert view.active_thread_id is None
        assert view.messages == []
        assert view.buckets == {}
