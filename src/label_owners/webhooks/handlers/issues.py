import logging

from label_owners.codeowners import CodeOwnersResolver
from label_owners.core.models import WebhookEvent
from label_owners.core.utils.logging import log_operation
from label_owners.integrations.github import GitHubClient
from label_owners.loaders import GitHubLabelPathsLoader, LabelPathsLoader
from label_owners.webhooks.handlers.base import EventHandler
from label_owners.webhooks.models import IssuesEventModel, WebhookResponse

logger = logging.getLogger(__name__)

EVENT_NAME = "issues.labeled"


class IssuesLabeledEventHandler(EventHandler):
    """
    Assigns the code owners of a label's configured path when the label is
    applied to an issue.

    Owners already assigned are left alone; only the missing ones are added,
    in a single request. Failures to load the label configuration or to add
    assignees propagate to the caller.
    """

    def __init__(
        self,
        client: GitHubClient,
        label_paths_loader: LabelPathsLoader | None = None,
        resolver: CodeOwnersResolver | None = None,
    ):
        self.github_client = client
        self.label_paths_loader = label_paths_loader or GitHubLabelPathsLoader(client)
        self.resolver = resolver or CodeOwnersResolver(client)

    async def handle(self, event: WebhookEvent) -> WebhookResponse:
        payload = IssuesEventModel.model_validate(event.payload)
        subject_ids = {"repo": payload.repository.full_name, "issue": str(payload.issue.number)}

        async with log_operation("assign_code_owners", subject_ids=subject_ids):
            return await self._assign_code_owners(payload)

    async def _assign_code_owners(self, payload: IssuesEventModel) -> WebhookResponse:
        repo = payload.repository.full_name
        installation_id = payload.installation_id

        label_paths = await self.label_paths_loader.get_label_paths(repo, installation_id)
        if not label_paths:
            return self._skipped("No label paths configured")

        label = payload.label.name if payload.label else None
        if label is None or label not in label_paths:
            return self._skipped(f"Label {label!r} has no configured path")

        path = label_paths[label]
        owners = await self.resolver.get_owners_by_path(repo, path, installation_id)
        if not owners:
            return self._skipped(f"No code owners for {path}")

        current = set(payload.issue.assignee_logins)
        to_add = [owner for owner in owners if owner not in current]
        if not to_add:
            return self._skipped("All code owners are already assigned")

        await self.github_client.add_assignees(repo, payload.issue.number, to_add, installation_id)
        logger.info(f"Assigned {', '.join(to_add)} to {repo}#{payload.issue.number} for label {label!r}")
        return WebhookResponse(
            status="assigned",
            detail=f"Code owners of {path}",
            event_type=EVENT_NAME,
            assignees=to_add,
        )

    @staticmethod
    def _skipped(reason: str) -> WebhookResponse:
        logger.info(f"Skipping assignment: {reason}")
        return WebhookResponse(status="skipped", detail=reason, event_type=EVENT_NAME)
