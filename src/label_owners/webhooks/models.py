from pydantic import BaseModel, Field


class WebhookRepository(BaseModel):
    """GitHub repository metadata from webhook payload."""

    id: int | None = Field(None, description="GitHub repository ID")
    name: str = Field("", description="Repository name (without owner)")
    full_name: str = Field(..., description="Owner/repo format")
    private: bool = Field(False, description="Repository visibility")
    default_branch: str = Field(default="main", description="Default branch name")


class WebhookInstallation(BaseModel):
    """GitHub App installation the event was delivered for."""

    id: int = Field(..., description="Installation ID used to mint access tokens")


class WebhookUser(BaseModel):
    """A GitHub user referenced by the payload."""

    login: str = Field(..., description="GitHub username")


class WebhookLabel(BaseModel):
    """Issue label."""

    name: str = Field(..., description="Label name")


class WebhookIssue(BaseModel):
    """The parts of an issue the service reads."""

    number: int = Field(..., description="Issue number")
    assignees: list[WebhookUser] = Field(default_factory=list, description="Users currently assigned")

    @property
    def assignee_logins(self) -> list[str]:
        return [assignee.login for assignee in self.assignees]


class IssuesEventModel(BaseModel):
    """GitHub ``issues`` webhook payload."""

    action: str = Field(..., description="Event action type (e.g., 'labeled')")
    repository: WebhookRepository = Field(..., description="Target repository")
    issue: WebhookIssue = Field(..., description="Issue the action applies to")
    label: WebhookLabel | None = Field(None, description="Label applied, for labeled/unlabeled actions")
    installation: WebhookInstallation | None = Field(None, description="GitHub App installation")
    sender: WebhookUser | None = Field(None, description="User who triggered the event")

    @property
    def installation_id(self) -> int | None:
        return self.installation.id if self.installation else None


class WebhookResponse(BaseModel):
    """Standardized response model for all webhook handlers."""

    status: str = Field(..., description="Processing status: assigned, skipped")
    detail: str | None = Field(None, description="Additional context")
    event_type: str | None = Field(None, description="Dispatch name of the event")
    assignees: list[str] = Field(default_factory=list, description="Users added as assignees")
