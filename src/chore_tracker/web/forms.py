# src/chore_tracker/web/forms.py

from __future__ import annotations

from flask_wtf import FlaskForm
from wtforms import DateField, IntegerField, SelectField, StringField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Optional

from ..chores.chore_models import UNCATEGORIZED, Category
from ..views.task_editor import DEFAULT_FREQUENCY_DAYS, TaskDraft


class TaskForm(FlaskForm):
    name = StringField("Name", validators=[DataRequired(), Length(max=200)])
    frequency_days = IntegerField(
        "Frequency (days)",
        default=DEFAULT_FREQUENCY_DAYS,
        validators=[InputRequired(), NumberRange(min=1)],
    )
    category_id = SelectField("Category", choices=[("", UNCATEGORIZED)], default="")
    description = TextAreaField("Description", render_kw={"rows": 3})
    last_completed = DateField("Last Completed", format="%Y-%m-%d", validators=[Optional()])
    submit = SubmitField("Save")

    def set_categories(self, categories: list[Category]) -> None:
        self.category_id.choices = [("", UNCATEGORIZED)] + [(c.id, c.name) for c in categories]

    def to_draft(self, task_id: str | None) -> TaskDraft:
        return TaskDraft(
            id=task_id,
            name=(self.name.data or "").strip(),
            frequency_days=int(self.frequency_days.data),
            description=(self.description.data or "").strip() or None,
            category_id=self.category_id.data or None,
            last_completed=self.last_completed.data,
        )


def form_data(draft: TaskDraft) -> dict:
    """Initial field values for rendering a draft (GET, no form submission)."""
    return {
        "name": draft.name,
        "frequency_days": draft.frequency_days,
        "category_id": draft.category_id or "",
        "description": draft.description or "",
        "last_completed": draft.last_completed,
    }
