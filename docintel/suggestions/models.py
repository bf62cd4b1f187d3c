from dataclasses import asdict, dataclass, field

TASK_PRIORITIES = ("low", "medium", "high")


@dataclass(frozen=True)
class FormField:
    name: str
    type: str


DEFAULT_FORM_SCHEMA: tuple[FormField, ...] = (
    FormField("payer_name", "string"),
    FormField("account_number", "string"),
    FormField("amount", "number"),
    FormField("date", "string"),
    FormField("due_date", "string"),
    FormField("invoice_number", "string"),
    FormField("notes", "string"),
)


@dataclass(frozen=True)
class AutofillSuggestion:
    form_mapping: dict[str, object] = field(default_factory=dict)
    confidence: float = 0.0
    missing_fields: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class EmailDraft:
    subject: str = ""
    body: str = ""


@dataclass(frozen=True)
class TaskDraft:
    title: str
    description: str = ""
    due_date: str = ""
    priority: str = "medium"
    estimated_time_minutes: int = 0


@dataclass(frozen=True)
class TaskList:
    tasks: list[TaskDraft] = field(default_factory=list)


@dataclass(frozen=True)
class SuggestionBundle:
    """Summary, autofill mapping, email draft and task list for one document.

    Always structurally complete: parts that could not be generated are
    empty placeholders. quota_limited is set when the premium summarizer
    rejected the request for plan or quota reasons.
    """

    summary: dict[str, str] = field(default_factory=lambda: {"summary": ""})
    autofill: AutofillSuggestion = field(default_factory=AutofillSuggestion)
    email: EmailDraft = field(default_factory=EmailDraft)
    tasks: TaskList = field(default_factory=TaskList)
    quota_limited: bool = False

    @property
    def summary_text(self) -> str:
        return self.summary.get("summary", "")

    def to_dict(self) -> dict[str, object]:
        data = asdict(self)
        data.pop("quota_limited")
        return data
