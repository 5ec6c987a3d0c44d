"""
CLI for rebuilding an image when its build file or base images changed.
Thin wrapper over RebuildManager.
"""
import click
import logging
from pathlib import Path
from typing import Optional

from ..build.manager import RebuildManager
from ..config.global_config_loader import load_global_config
from ..core.enums import EngineKind, ExitCode
from ..core.exceptions import RebuilderError, MissingBuildFileError, MissingTargetError
from ..core.models import RebuildConfig
from ..engine.factory import select_engine
from ..utils.tags import build_timestamp, expand_tags, parse_tags


class RebuildCommand(click.Command):
    """Reports every usage error with the unrecognized argument exit code"""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = ExitCode.UNRECOGNIZED_ARGUMENT
            raise


@click.command(cls=RebuildCommand)
@click.option('-e', 'executable', default=None, metavar='PATH',
              help='Engine executable; its path must contain "docker" or "podman"')
@click.option('-p', 'engine_kind', flag_value=EngineKind.PODMAN.value, help='Use podman')
@click.option('-d', 'engine_kind', flag_value=EngineKind.DOCKER.value, help='Use docker')
@click.option('-r', 'force', is_flag=True, help='Force a rebuild regardless of digests')
@click.option('-f', 'build_file', default=None, metavar='PATH',
              help='Dockerfile/Containerfile; its directory becomes the default context')
@click.option('-c', 'context_dir', default=None, metavar='PATH', help='Build context directory')
@click.option('-t', 'tags', default=None, metavar='TAGS',
              help='Comma separated tags, "_timestamp" adds the current UTC time')
@click.option('--global-config', default=None, help='Path to global config YAML')
@click.option('--log-level', default='INFO', help='Log level')
@click.argument('target_image', required=False)
@click.pass_context
def rebuild(
    ctx: click.Context,
    executable: Optional[str],
    engine_kind: Optional[str],
    force: bool,
    build_file: Optional[str],
    context_dir: Optional[str],
    tags: Optional[str],
    global_config: Optional[str],
    log_level: str,
    target_image: Optional[str]
):
    """Rebuild TARGET_IMAGE if its build file or any of its base images changed"""

    # Setup logging
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    logger = logging.getLogger(__name__)

    try:
        config = build_rebuild_config(
            executable=executable,
            engine_kind=engine_kind,
            force=force,
            build_file=build_file,
            context_dir=context_dir,
            tags=tags,
            global_config=global_config,
            target_image=target_image
        )
    except RebuilderError as e:
        logger.error(str(e))
        click.echo(f"Error: {e}", err=True)
        ctx.exit(int(e.exit_code))

    result = RebuildManager(config).run()

    if result.built:
        click.echo(f"Built {', '.join(result.image_tags)} (exit code {result.build_exit_code})")
        if result.build_exit_code:
            ctx.exit(result.build_exit_code)
    else:
        click.echo(f"{config.target_image} is up to date")


def build_rebuild_config(
    executable: Optional[str],
    engine_kind: Optional[str],
    force: bool,
    build_file: Optional[str],
    context_dir: Optional[str],
    tags: Optional[str],
    global_config: Optional[str],
    target_image: Optional[str]
) -> RebuildConfig:
    """
    Validate the command line and build the run configuration.

    Checks run in a fixed order: explicit engine selection, tags, target
    image name, engine discovery, build file.

    Raises:
        RebuilderError: Subclass matching the first failed check
    """
    logger = logging.getLogger(__name__)
    global_cfg = load_global_config(global_config)
    build_time = build_timestamp()

    engine_options = {
        'docker_executable': global_cfg.engine.docker_executable,
        'podman_executable': global_cfg.engine.podman_executable,
        'pull_timeout': global_cfg.engine.pull_timeout,
        'build_timeout': global_cfg.build.build_timeout,
    }

    engine = None
    if executable or engine_kind:
        engine = select_engine(executable=executable, kind=engine_kind, **engine_options)

    if force:
        logger.info("Forcing rebuild")

    # Context defaults to the build file's directory unless given
    if context_dir is None:
        context_dir = str(Path(build_file).parent) if build_file else "."
        logger.info(f"Using context {context_dir}")

    tag_list = parse_tags(tags)
    if not tag_list:
        tag_list = list(global_cfg.build.default_tags)
        logger.info(
            f"Adding default tags {tag_list}, the placeholder "
            f"'{global_cfg.build.timestamp_placeholder}' stands for the current UTC time "
            f"{build_time}. Pass -t (e.g. '-t latest') to choose the tags."
        )
    expanded_tags = expand_tags(tag_list, build_time, global_cfg.build.timestamp_placeholder)

    if not target_image:
        raise MissingTargetError(
            "No target image name specified! Run with 'image-rebuilder [optional flags] my-image-name'"
        )

    if engine is None:
        engine = select_engine(**engine_options)

    if build_file is None:
        build_file = engine.default_build_file
    if not Path(build_file).is_file():
        raise MissingBuildFileError(f"Dockerfile named [{build_file}] not found")

    return RebuildConfig(
        engine=engine,
        build_file=build_file,
        context_dir=context_dir,
        target_image=target_image,
        tags=expanded_tags,
        force=force,
        state_dir=Path(global_cfg.digest.state_dir),
        label=global_cfg.build.label,
        hash_algorithm=global_cfg.digest.algorithm,
        build_file_record=global_cfg.digest.build_file_record,
        image_record_suffix=global_cfg.digest.image_record_suffix
    )


if __name__ == '__main__':
    rebuild()
