import os
import logging
from github import Auth, Github, GithubIntegration, Repository
from github.GitRelease import GitRelease
logger = logging.getLogger(__name__)


class GitHubClient:
    def __init__(self):
        token = os.getenv("GITHUB_TOKEN")
        app_id = os.getenv("GITHUB_APP_ID")
        install_id = os.getenv("GITHUB_APP_INSTALLATION_ID")
        private_key = os.getenv("GITHUB_APP_PRIVATE_KEY")
        if not token:
            if not (app_id and install_id and private_key):
                logger.error("GITHUB_TOKEN or GitHub App credentials env vars are mandatory")
                raise EnvironmentError("Missing GitHub credentials")
            integration = GithubIntegration(int(app_id), private_key)
            token = integration.get_access_token(int(install_id)).token
        self.client: Github = Github(auth=Auth.Token(token))

    def get_repo(self, full_name: str) -> Repository.Repository:
        return self.client.get_repo(full_name)

    def get_release(self, full_name: str, tag: str) -> GitRelease:
        return self.get_repo(full_name).get_release(tag)
