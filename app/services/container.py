"""
Service graph for one running agent.

Built once in the app lifespan and stored on `app.state.services`. Every
configuration value a service needs is passed in here, so nothing below
reads the global settings object.
"""

from dataclasses import dataclass

from app.config import Settings
from app.services.docs import (
    AccessLevel,
    ChangeOrchestrator,
    DemoController,
    GapFixApplicator,
    GapSimulator,
    InMemoryReviewStore,
    ReviewStore,
)
from app.services.events import EventBroadcaster
from app.services.github import GitHubService, RepoRef


@dataclass
class AgentServices:
    """All long-lived services shared by the HTTP handlers."""

    docs_repo: RepoRef
    product_repo: RepoRef
    github: GitHubService
    broadcaster: EventBroadcaster
    store: ReviewStore
    orchestrator: ChangeOrchestrator
    simulator: GapSimulator
    gap_fixer: GapFixApplicator
    demo: DemoController


def build_services(
    config: Settings,
    github: GitHubService | None = None,
    store: ReviewStore | None = None,
) -> AgentServices:
    """Wire up the agent from settings. `github` and `store` may be substituted."""
    docs_repo = RepoRef(config.docs_repo_owner, config.docs_repo)
    product_repo = RepoRef(config.product_repo_owner, config.product_repo)
    github = github or GitHubService(config.github_token)
    store = store or InMemoryReviewStore()
    broadcaster = EventBroadcaster()

    orchestrator = ChangeOrchestrator(
        github,
        store,
        broadcaster,
        docs_repo,
        access_level=AccessLevel(config.agent_access_level),
    )

    return AgentServices(
        docs_repo=docs_repo,
        product_repo=product_repo,
        github=github,
        broadcaster=broadcaster,
        store=store,
        orchestrator=orchestrator,
        simulator=GapSimulator(broadcaster, delay_scale=config.analysis_delay_scale),
        gap_fixer=GapFixApplicator(github, store, broadcaster, docs_repo),
        demo=DemoController(
            github,
            store,
            orchestrator,
            broadcaster,
            docs_repo,
            product_repo,
            trigger_delay=config.trigger_delay_seconds,
        ),
    )
