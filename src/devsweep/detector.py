"""Detection of installed development tools."""

import glob
import logging
import os
from typing import NamedTuple

from pydantic import BaseModel, Field

from devsweep.models import Domain
from devsweep.utils import command_exists, expand_path, path_exists

logger = logging.getLogger(__name__)


class ToolProbe(NamedTuple):
    """How to recognise one tool: any command on PATH or any existing path."""

    name: str
    domain: Domain
    commands: tuple[str, ...] = ()
    paths: tuple[str, ...] = ()


TOOL_PROBES: list[ToolProbe] = [
    # Frontend
    ToolProbe("node", Domain.FRONTEND, ("node",)),
    ToolProbe("npm", Domain.FRONTEND, ("npm",)),
    ToolProbe("yarn", Domain.FRONTEND, ("yarn",)),
    ToolProbe("pnpm", Domain.FRONTEND, ("pnpm",)),
    ToolProbe("bun", Domain.FRONTEND, ("bun",)),
    ToolProbe("deno", Domain.FRONTEND, ("deno",)),
    # Backend
    ToolProbe("python", Domain.BACKEND, ("python3", "python")),
    ToolProbe("java", Domain.BACKEND, ("java",)),
    ToolProbe("go", Domain.BACKEND, ("go",)),
    ToolProbe("rust", Domain.BACKEND, ("cargo",)),
    ToolProbe("php", Domain.BACKEND, ("php",)),
    ToolProbe("ruby", Domain.BACKEND, ("ruby",)),
    ToolProbe(".net", Domain.BACKEND, ("dotnet",)),
    ToolProbe("maven", Domain.BACKEND, ("mvn",)),
    ToolProbe("gradle", Domain.BACKEND, ("gradle",)),
    # Mobile
    ToolProbe("xcode", Domain.MOBILE, paths=("/Applications/Xcode.app",)),
    ToolProbe("android", Domain.MOBILE, ("adb",), ("~/Library/Android",)),
    ToolProbe("flutter", Domain.MOBILE, ("flutter",)),
    ToolProbe("cocoapods", Domain.MOBILE, ("pod",)),
    # DevOps
    ToolProbe("docker", Domain.DEVOPS, ("docker",)),
    ToolProbe("kubernetes", Domain.DEVOPS, ("kubectl",)),
    ToolProbe("terraform", Domain.DEVOPS, ("terraform",)),
    ToolProbe("helm", Domain.DEVOPS, ("helm",)),
    ToolProbe("minikube", Domain.DEVOPS, ("minikube",)),
    ToolProbe("vagrant", Domain.DEVOPS, ("vagrant",)),
    ToolProbe("aws-cli", Domain.DEVOPS, ("aws",)),
    ToolProbe("gcloud", Domain.DEVOPS, ("gcloud",)),
    ToolProbe("azure-cli", Domain.DEVOPS, ("az",)),
    # Data/ML
    ToolProbe("conda", Domain.DATAML, ("conda",)),
    ToolProbe("jupyter", Domain.DATAML, ("jupyter",)),
    ToolProbe("pip", Domain.DATAML, ("pip3", "pip")),
]

# Python packages looked up in user site-packages
PYTHON_PACKAGES = {"tensorflow": "tensorflow", "pytorch": "torch"}

_SITE_PACKAGES_GLOBS = (
    "~/Library/Python/*/lib/python/site-packages",
    "~/.local/lib/*/site-packages",
)


class DetectionResult(BaseModel):
    """Detected tools grouped by domain."""

    tools: dict[Domain, list[str]] = Field(default_factory=dict)

    def has(self, domain: Domain) -> bool:
        """Whether any tool of the domain was found."""
        return bool(self.tools.get(domain))

    def summary(self) -> str:
        """One line per domain with detected tools."""
        lines = [
            f"{domain.label}: {', '.join(self.tools[domain])}"
            for domain in Domain
            if self.tools.get(domain)
        ]
        return "\n".join(lines) if lines else "No development tools detected"


class StackDetector:
    """Detects installed development tools and frameworks."""

    def __init__(self, probes: list[ToolProbe] | None = None) -> None:
        self._probes = TOOL_PROBES if probes is None else probes

    def detect_all(self) -> DetectionResult:
        """Probe every known tool."""
        result = DetectionResult()
        for probe in self._probes:
            if self._matches(probe):
                result.tools.setdefault(probe.domain, []).append(probe.name)

        for name, package in PYTHON_PACKAGES.items():
            if self.has_python_package(package):
                result.tools.setdefault(Domain.DATAML, []).append(name)

        logger.debug("Detected tools: %s", result.tools)
        return result

    @staticmethod
    def _matches(probe: ToolProbe) -> bool:
        if any(command_exists(cmd) for cmd in probe.commands):
            return True
        return any(path_exists(expand_path(p)) for p in probe.paths)

    @staticmethod
    def has_python_package(package: str) -> bool:
        """Check user site-packages directories for an installed package."""
        for pattern in _SITE_PACKAGES_GLOBS:
            for site_packages in glob.glob(str(expand_path(pattern))):
                if os.path.isdir(os.path.join(site_packages, package)):
                    return True
        return False
