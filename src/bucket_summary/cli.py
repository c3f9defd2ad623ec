"""Command-line interface for bucket-summary.

Commands:
    - run: Summarize every prefix of a bucket and write FULL/OUTPUT/TOTAL.json
    - export-csv: Reshape an OUTPUT.json into a date,<field> CSV

The report source must be selected with --source. Only the parameters relevant
to that source are used.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer

from . import __version__
from .aggregation import FailurePolicy
from .artifacts import build_csv, load_summaries
from .core import settings
from .inventory import build_source, run_inventory
from .schemas import CommandSourceConfig, S3SourceConfig

app = typer.Typer(
    name="bucket-summary",
    help="Aggregate object counts and sizes per storage prefix.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"bucket-summary {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    Bucket-Summary: per-prefix object statistics for S3 buckets.
    """
    pass


class SourceType(str, Enum):
    """Where prefix lists and reports come from."""

    command = "command"
    s3 = "s3"


SourceOption = Annotated[
    SourceType,
    typer.Option(
        "--source",
        "-s",
        help="Report source: command (external CLI) or s3 (boto3)",
        case_sensitive=False,
    ),
]


def _create_source_config(
    source: SourceType,
    bucket: str,
    list_command: Optional[str] = None,
    report_command: Optional[str] = None,
    timeout: int = 300,
    root_prefix: str = "",
    depth: int = 1,
    access_key_id: Optional[str] = None,
    secret_access_key: Optional[str] = None,
    session_token: Optional[str] = None,
    region_name: Optional[str] = None,
    endpoint_url: Optional[str] = None,
    aws_profile: Optional[str] = None,
):
    """Create the report source configuration for the selected source."""
    if not bucket:
        raise ValueError(
            "A bucket name is required (argument or BUCKET_SUMMARY_BUCKET_NAME)"
        )

    if source == "command":
        return CommandSourceConfig(
            bucket=bucket,
            list_command=list_command or settings.list_command,
            report_command=report_command or settings.report_command,
            timeout=timeout,
        )

    elif source == "s3":
        return S3SourceConfig(
            bucket=bucket,
            root_prefix=root_prefix,
            depth=depth,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
        )

    else:
        raise ValueError(f"Invalid source: {source}. Must be 'command' or 's3'")


@app.command("run")
def run_cmd(
    source: SourceOption,
    bucket: Annotated[
        str,
        typer.Argument(help="Bucket to summarize (defaults to settings)"),
    ] = settings.bucket_name,
    output_dir: Annotated[
        Path, typer.Option("--output-dir", "-o", help="Directory for JSON artifacts")
    ] = Path(settings.output_dir),
    max_concurrency: Annotated[
        int,
        typer.Option("--max-concurrency", help="Maximum prefixes fetched at once"),
    ] = settings.max_concurrency,
    skip_failed: Annotated[
        bool,
        typer.Option(
            "--skip-failed",
            help="Leave failed prefixes out instead of aborting the run",
        ),
    ] = False,
    # Command source options
    list_command: Annotated[
        Optional[str],
        typer.Option("--list-command", help="Command template listing prefixes"),
    ] = None,
    report_command: Annotated[
        Optional[str],
        typer.Option("--report-command", help="Command template for one report"),
    ] = None,
    timeout: Annotated[
        int, typer.Option("--timeout", help="Command timeout in seconds")
    ] = settings.timeout,
    # S3 options
    root_prefix: Annotated[
        str, typer.Option("--root-prefix", help="Prefix holding the date folders")
    ] = "",
    depth: Annotated[
        int, typer.Option("--depth", help="Folder levels forming one prefix")
    ] = 1,
    access_key_id: Annotated[
        Optional[str],
        typer.Option("--access-key-id", help="AWS access key ID (for s3 source)"),
    ] = None,
    secret_access_key: Annotated[
        Optional[str],
        typer.Option(
            "--secret-access-key", help="AWS secret access key (for s3 source)"
        ),
    ] = None,
    session_token: Annotated[
        Optional[str],
        typer.Option("--session-token", help="AWS session token (for s3 source)"),
    ] = None,
    region_name: Annotated[
        str, typer.Option("--region", help="AWS region name (for s3 source)")
    ] = "us-east-1",
    endpoint_url: Annotated[
        Optional[str], typer.Option("--endpoint-url", help="Custom S3 endpoint URL")
    ] = None,
    aws_profile: Annotated[
        Optional[str],
        typer.Option("--aws-profile", help="AWS CLI profile name (for s3 source)"),
    ] = None,
) -> None:
    """
    Summarize every prefix of a bucket.

    Examples:
        Command: bucket-summary run my-bucket --source command
        S3: bucket-summary run my-bucket --source s3 --root-prefix raw \
            --depth 3 --aws-profile myprofile
    """
    try:
        config = _create_source_config(
            source=source,
            bucket=bucket,
            list_command=list_command,
            report_command=report_command,
            timeout=timeout,
            root_prefix=root_prefix,
            depth=depth,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
        )

        policy = FailurePolicy.skip_failed if skip_failed else FailurePolicy.fail_fast
        result = run_inventory(
            build_source(config),
            output_dir=output_dir,
            max_concurrency=max_concurrency,
            failure_policy=policy,
        )

        typer.echo(f"Bucket: {config.bucket}")
        typer.echo(f"Prefixes: {len(result.prefixes)}")
        typer.echo(f"Summarized: {len(result.summaries)}")
        typer.echo(f"Objects: {result.totals.total_count:,}")
        typer.echo(f"Total size: {result.totals.total_size:,} bytes")
        typer.echo(f"Human readable: {result.totals.total_size_mb}")
        typer.echo(f"Artifacts: {output_dir}")

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("export-csv")
def export_csv_cmd(
    summaries_file: Annotated[
        Path, typer.Argument(help="OUTPUT.json produced by the run command")
    ],
    field: Annotated[
        str, typer.Option("--field", "-f", help="Column to export: count, size or avg")
    ] = "count",
    output: Annotated[
        Optional[Path],
        typer.Option("--output", help="CSV file to write (default: stdout)"),
    ] = None,
) -> None:
    """
    Export summaries as a date,<field> CSV.

    Labels must be YYYYMMDD dates; they are written as YYYY-MM-DD.
    """
    try:
        content = build_csv(load_summaries(summaries_file), field=field)

        if output is None:
            typer.echo(content, nl=False)
        else:
            output.write_text(content, encoding="utf-8")
            typer.echo(f"Wrote {output}")

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
