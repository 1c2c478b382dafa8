"""The ``package`` command: build and package shader compiler outputs."""

from pathlib import Path
from typing import Annotated

import typer

from shaderpack.build import create_build_driver
from shaderpack.cli.app import AppContext
from shaderpack.cli.decorators import handle_errors
from shaderpack.cli.helpers import print_result
from shaderpack.config.models import BuildConfiguration
from shaderpack.config.platforms import detect_host_platform, resolve_profile
from shaderpack.packaging.pipeline import PackageRequest, create_packaging_pipeline


@handle_errors
def package(
    ctx: typer.Context,
    project_dir: Annotated[
        Path,
        typer.Argument(help="Source directory of the shader compiler project"),
    ],
    build_dir: Annotated[
        Path | None,
        typer.Option(
            "--build-dir",
            help="Build directory (default: a fresh build-<timestamp> in the project)",
        ),
    ] = None,
    configuration: Annotated[
        BuildConfiguration,
        typer.Option("-C", "--configuration", help="Build configuration"),
    ] = BuildConfiguration.RELEASE,
    artifacts_dir: Annotated[
        Path,
        typer.Option(
            "-o", "--artifacts-dir", help="Output directory, reset before use"
        ),
    ] = Path("artifacts"),
    output: Annotated[
        str | None,
        typer.Option(
            "-f",
            "--output",
            help="Archive file name (default: <package>-<platform>-<configuration>)",
        ),
    ] = None,
    platform: Annotated[
        str | None,
        typer.Option("-p", "--platform", help="Target platform profile"),
    ] = None,
    jobs: Annotated[
        int | None,
        typer.Option("-j", "--jobs", min=1, help="Parallel build jobs"),
    ] = None,
    skip_build: Annotated[
        bool,
        typer.Option("--skip-build", help="Package an existing build tree"),
    ] = False,
    ci_output: Annotated[
        Path | None,
        typer.Option(
            "--ci-output", help="Append artifact=<path> to this file on success"
        ),
    ] = None,
    wrap_dir: Annotated[
        str | None,
        typer.Option("--wrap-dir", help="Nest archive members under this folder"),
    ] = None,
) -> None:
    """Build the project and package its compiler libraries and headers."""
    app_context: AppContext = ctx.obj
    settings = app_context.settings

    profile = resolve_profile(platform or detect_host_platform(), settings.profiles)

    request = PackageRequest(
        project_dir=project_dir,
        artifacts_dir=artifacts_dir,
        profile=profile,
        configuration=configuration,
        build_dir=build_dir,
        archive_name=output,
        package_name=settings.package_name,
        jobs=jobs or settings.jobs,
        skip_build=skip_build,
        ci_output_file=ci_output or settings.ci_output_file,
        wrap_dir=wrap_dir,
    )

    build_driver = None
    if not skip_build or profile.use_install_tree:
        build_driver = create_build_driver(
            cmake_executable=settings.cmake_executable,
            generator=settings.generator,
            extra_args=settings.cmake_args,
        )

    pipeline = create_packaging_pipeline(build_driver=build_driver)
    result = pipeline.run(request)
    print_result(result)

    if not result.success:
        raise typer.Exit(1)


def register_commands(app: typer.Typer) -> None:
    app.command(name="package")(package)
