from reckon.task.models import Task
from reckon.tui.task_picker import TaskPicker


def tasks():
    return [
        Task(id="t1", title="Write report", tags=["work"]),
        Task(id="t2", title="Buy milk", tags=["home"]),
        Task(id="t3", title="Fix bug", tags=["work", "code"]),
    ]


def type_text(picker, text):
    for char in text:
        picker.handle_key(char)


def test_initial_selection_is_first():
    picker = TaskPicker(tasks())
    assert picker.selected_task().id == "t1"
    assert len(picker.filtered_tasks) == 3


def test_navigation_stays_in_bounds():
    picker = TaskPicker(tasks())
    picker.handle_key("up")
    assert picker.selected_index == 0
    for _ in range(5):
        picker.handle_key("down")
    assert picker.selected_task().id == "t3"
    picker.handle_key("k")
    assert picker.selected_task().id == "t2"


def test_filter_by_title_and_tag():
    picker = TaskPicker(tasks())
    type_text(picker, "bug")
    assert [t.id for t in picker.filtered_tasks] == ["t3"]

    picker = TaskPicker(tasks())
    type_text(picker, "HOME")
    assert [t.id for t in picker.filtered_tasks] == ["t2"]

    picker = TaskPicker(tasks())
    type_text(picker, "wor")
    assert [t.id for t in picker.filtered_tasks] == ["t1", "t3"]


def test_selection_reset_when_filter_shrinks():
    picker = TaskPicker(tasks())
    picker.handle_key("down")
    picker.handle_key("down")
    type_text(picker, "milk")
    assert picker.selected_index == 0
    assert picker.selected_task().id == "t2"


def test_backspace_restores_all():
    picker = TaskPicker(tasks())
    type_text(picker, "zz")
    assert picker.selected_task() is None
    picker.handle_key("backspace")
    picker.handle_key("backspace")
    assert len(picker.filtered_tasks) == 3


def test_view_lists_tasks_and_footer():
    text = TaskPicker(tasks()).view()
    assert text.startswith("Select Task\n\n> Search tasks...\n\n")
    assert "▶ Write report [work]\n" in text
    assert "  Buy milk [home]\n" in text
    assert text.endswith("↑/↓: navigate • enter: select • esc: cancel")


def test_view_no_match():
    picker = TaskPicker(tasks())
    type_text(picker, "zz")
    assert "No tasks found" in picker.view()


def test_view_counts_hidden_tasks():
    many = [Task(id=f"id{n}", title=f"Task {n}") for n in range(12)]
    text = TaskPicker(many).view()
    assert "\n... and 2 more" in text
    assert "Task 10" not in text


def test_set_size_sets_search_width():
    picker = TaskPicker(tasks())
    picker.set_size(40, 20)
    assert (picker.width, picker.height) == (40, 20)
    assert picker.search_input.width == 36