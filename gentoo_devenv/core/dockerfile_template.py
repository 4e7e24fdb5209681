"""Dockerfile and Portage file templates for the Gentoo image."""

from typing import Dict, List

from .constants import (
    ACCEPT_KEYWORDS_FILE,
    CONTAINER_PREFIX,
    MAKE_CONF_FILE,
    PACKAGE_LICENSE_FILE,
    PACKAGE_USE_FILE,
    PORTAGE_DIR_NAME,
)

GENTOO_DOCKERFILE = """FROM {portage_image} AS portage
FROM {base_image}

# Ebuild repository snapshot from the portage image
COPY --from=portage /var/db/repos/gentoo /var/db/repos/gentoo

# Portage configuration
COPY {portage_dir}/{make_conf} /tmp/make.conf.{prefix}
RUN cat /tmp/make.conf.{prefix} >> /etc/portage/make.conf && rm /tmp/make.conf.{prefix}
COPY {portage_dir}/{package_use} /etc/portage/package.use/{prefix}
COPY {portage_dir}/{accept_keywords} /etc/portage/package.accept_keywords/{prefix}
COPY {portage_dir}/{package_license} /etc/portage/package.license/{prefix}

{env_vars}

{emerge}

RUN mkdir -p {workdir}
WORKDIR {workdir}

CMD ["{shell}"]
"""

PORTAGE_FILE_HEADER = "# Managed by gentoo-devenv; edit with `gentoo-devenv config`\n"


def _quote(value: str) -> str:
    return '"' + value.replace('\\', '\\\\').replace('"', '\\"') + '"'


def _render_atom_table(table: Dict[str, List[str]]) -> str:
    lines = [f"{atom} {' '.join(values)}" for atom, values in table.items()]
    return PORTAGE_FILE_HEADER + "".join(f"{line}\n" for line in lines)


def render_portage_files(config) -> Dict[str, str]:
    """Render Portage configuration files keyed by filename."""
    portage = config.portage
    make_conf = PORTAGE_FILE_HEADER + "".join(
        f"{key}={_quote(value)}\n" for key, value in portage.make_conf.items()
    )
    return {
        MAKE_CONF_FILE: make_conf,
        PACKAGE_USE_FILE: _render_atom_table(portage.package_use),
        ACCEPT_KEYWORDS_FILE: _render_atom_table(portage.accept_keywords),
        PACKAGE_LICENSE_FILE: _render_atom_table(portage.package_license),
    }


def generate_dockerfile(config) -> str:
    """Generate Dockerfile from configuration."""
    env_vars = [f"ENV {key}={_quote(value)}" for key, value in config.env_vars.items()]

    if config.packages:
        atoms = " \\\n        ".join(config.packages)
        emerge = (
            "RUN emerge --quiet-build --noreplace \\\n"
            f"        {atoms} && \\\n"
            "    rm -rf /var/cache/distfiles/*"
        )
    else:
        emerge = "# No packages requested"

    return GENTOO_DOCKERFILE.format(
        portage_image=config.portage_image,
        base_image=config.base_image,
        portage_dir=PORTAGE_DIR_NAME,
        prefix=CONTAINER_PREFIX,
        make_conf=MAKE_CONF_FILE,
        package_use=PACKAGE_USE_FILE,
        accept_keywords=ACCEPT_KEYWORDS_FILE,
        package_license=PACKAGE_LICENSE_FILE,
        env_vars="\n".join(env_vars) if env_vars else "# No custom environment variables",
        emerge=emerge,
        workdir=config.workdir,
        shell=config.shell,
    )
