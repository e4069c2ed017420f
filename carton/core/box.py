"""Box Projection — provisioning view derived from a decoded Component.

Invariants:
    - build_box() is pure: same Component + hook builder → equal Box, no IO
    - Derived lookups (domain, provider, public ip, one-click) degrade to ""/False
    - repo section exists iff component.repo is not None
    - commit starts empty; the provisioner fills it in
"""

from collections.abc import Callable
from dataclasses import dataclass

from carton.core.component import Component
from carton.core.descriptors import Operation
from carton.core.domain_types import (
    CI_HOOK, DOMAIN, ONECLICK, PROVIDER, PUBLICIPV4, BoxLevel,
)
from carton.core.hooks import Hook, build_hook

HookBuilder = Callable[[list[Operation], str], Hook]


@dataclass(frozen=True)
class EnvVar:
    name: str
    value: str


@dataclass
class RepoView:
    type: str
    source: str
    one_click: bool
    url: str
    hook: Hook | None = None


@dataclass
class Box:
    """What the provisioning engine receives for one component."""
    id: str
    level: BoxLevel
    name: str
    domain_name: str
    inputs: dict[str, str]
    envs: list[EnvVar]
    tosca_type: str
    operations: list[Operation]
    provider: str
    public_ip: str
    state: str
    commit: str = ""
    repo: RepoView | None = None

    def to_dict(self) -> dict:
        repo = None
        if self.repo is not None:
            repo = {
                "type": self.repo.type,
                "source": self.repo.source,
                "one_click": self.repo.one_click,
                "url": self.repo.url,
                "hook": self.repo.hook.to_dict() if self.repo.hook else None,
            }
        return {
            "id": self.id,
            "level": self.level.value,
            "name": self.name,
            "domain_name": self.domain_name,
            "inputs": dict(self.inputs),
            "envs": [{"name": e.name, "value": e.value} for e in self.envs],
            "tosca_type": self.tosca_type,
            "operations": [op.model_dump() for op in self.operations],
            "commit": self.commit,
            "provider": self.provider,
            "public_ip": self.public_ip,
            "state": self.state,
            "repo": repo,
        }


def build_box(
    component: Component, hook_builder: HookBuilder = build_hook,
) -> Box:
    """Project a Component into a Box. Pure, no IO."""
    box = Box(
        id=component.id,
        level=BoxLevel.SOME,
        name=component.name,
        domain_name=domain_name(component),
        inputs=component.inputs.to_flat_map(),
        envs=env_vars(component),
        tosca_type=component.tosca_type,
        operations=list(component.operations),
        provider=provider(component),
        public_ip=public_ip(component),
        state=component.state,
    )
    if component.repo is not None:
        box.repo = RepoView(
            type=component.repo.rtype,
            source=component.repo.source,
            one_click=with_one_click(component),
            url=component.repo.url,
            hook=hook_builder(component.operations, CI_HOOK),
        )
    return box


def domain_name(component: Component) -> str:
    return component.inputs.lookup(DOMAIN)


def provider(component: Component) -> str:
    return component.inputs.lookup(PROVIDER)


def public_ip(component: Component) -> str:
    return component.outputs.lookup(PUBLICIPV4)


def with_one_click(component: Component) -> bool:
    """True iff the oneclick env var has non-whitespace content."""
    return len(component.envs.lookup(ONECLICK).strip()) > 0


def env_vars(component: Component) -> list[EnvVar]:
    # every env pair is exported as-is, duplicates included
    return [EnvVar(name=p.key, value=p.value) for p in component.envs]
