"""Static detection tables.

Order matters in every table: entries are probed top to bottom and the
first hit wins.
"""

from pmdetect.detector.types import Agent, AgentName

MANIFEST_FILENAME = "package.json"

# Lock file name -> package manager family. Probed as regular files only.
LOCKS: dict[str, AgentName] = {
    "bun.lock": AgentName.BUN,
    "bun.lockb": AgentName.BUN,
    "deno.lock": AgentName.DENO,
    "pnpm-lock.yaml": AgentName.PNPM,
    "pnpm-workspace.yaml": AgentName.PNPM,
    "yarn.lock": AgentName.YARN,
    "package-lock.json": AgentName.NPM,
    "npm-shrinkwrap.json": AgentName.NPM,
}

# Markers left behind by a previous install. A trailing slash means the
# marker is a directory.
INSTALL_METADATA: dict[str, AgentName] = {
    "node_modules/.deno/": AgentName.DENO,
    "node_modules/.pnpm/": AgentName.PNPM,
    "node_modules/.yarn-state.yml": AgentName.YARN,
    "node_modules/.yarn_integrity": AgentName.YARN,
    "node_modules/.package-lock.json": AgentName.NPM,
    ".pnp.cjs": AgentName.YARN,
    ".pnp.js": AgentName.YARN,
    "bun.lock": AgentName.BUN,
    "bun.lockb": AgentName.BUN,
}

# Only Yarn classic writes this marker; every other yarn marker is berry.
YARN_CLASSIC_MARKER = ".yarn_integrity"

AGENTS: tuple[str, ...] = tuple(agent.value for agent in Agent)
