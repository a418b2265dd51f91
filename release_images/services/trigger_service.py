import json
import logging
import os

from release_images.clients.github_client import GitHubClient
from release_images.models import TriggerEvent
from release_images.utils.logging import setup_logger

RELEASE_EVENT = "release"
MANUAL_EVENT = "workflow_dispatch"
RELEASE_ACTIONS = frozenset({"prereleased", "released"})


class TriggerService:
    def __init__(self):
        self.logger: logging.Logger = setup_logger("TriggerService")

    def evaluate(self, event: TriggerEvent) -> bool:
        if event.name == MANUAL_EVENT:
            return True
        if event.name == RELEASE_EVENT and event.action in RELEASE_ACTIONS:
            return True
        self.logger.info(f"Event {event} does not trigger a build")
        return False

    def load_event(self) -> TriggerEvent:
        name = os.environ.get("GITHUB_EVENT_NAME")
        if not name:
            raise EnvironmentError("GITHUB_EVENT_NAME is not set; use --manual or --release-tag")
        action = None
        event_path = os.environ.get("GITHUB_EVENT_PATH")
        if event_path and os.path.isfile(event_path):
            with open(event_path, "r") as f:
                action = json.load(f).get("action")
        return TriggerEvent(name=name, action=action)

    def event_for_release(self, repo: str, tag: str) -> tuple[TriggerEvent, str]:
        github = GitHubClient()
        release = github.get_release(repo, tag)
        if release.draft:
            raise ValueError(f"Release {tag} of {repo} is still a draft")
        commit = github.get_repo(repo).get_commit(release.tag_name).sha
        action = "prereleased" if release.prerelease else "released"
        self.logger.info(f"Found release {release.tag_name} ({action}) at {commit} for repository {repo}")
        return TriggerEvent(name=RELEASE_EVENT, action=action), commit
