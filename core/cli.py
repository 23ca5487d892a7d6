"""
Command-line interface for the ParcelIQ relay
"""
import click

from core.config import PROVIDER_KEY_FIELDS, settings
from core.logging import get_logger
from d0_gateway.factory import credential_required

logger = get_logger(__name__)


@click.group()
@click.version_option(version=settings.app_version)
def cli():
    """ParcelIQ relay CLI - credential-hiding proxy for property data APIs"""
    pass


@cli.command()
@click.option("--host", default=settings.host, help="Host to bind to")
@click.option("--port", default=settings.port, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
def runserver(host: str, port: int, reload: bool):
    """Run the relay server"""
    import uvicorn

    click.echo(f"Starting {settings.app_name} on {host}:{port}")
    click.echo(f"Environment: {settings.environment}")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@cli.command()
@click.option(
    "--provider",
    type=click.Choice(sorted(PROVIDER_KEY_FIELDS)),
    help="Provider to check (default: all)",
)
def check_config(provider: str):
    """Report which provider credentials are configured"""
    providers = [provider] if provider else sorted(PROVIDER_KEY_FIELDS)
    missing = 0

    for name in providers:
        api_key = settings.get_api_key(name)
        setting = PROVIDER_KEY_FIELDS[name].upper()
        if api_key:
            masked_key = api_key[:4] + "..." if len(api_key) > 8 else "***"
            click.echo(f"✓ {name}: {setting} configured ({masked_key})")
        elif not credential_required(name):
            click.echo(f"- {name}: {setting} not set (optional, callers may supply their own)")
        else:
            missing += 1
            click.echo(f"✗ {name}: {setting} not set", err=True)

    if missing:
        raise SystemExit(1)


@cli.command()
def env_info():
    """Display environment information"""
    click.echo(f"{settings.app_name} v{settings.app_version}")
    click.echo(f"Environment: {settings.environment}")
    click.echo(f"Listen: {settings.host}:{settings.port}")
    click.echo(f"Request timeout: {settings.request_timeout:g}s")
    click.echo(f"Max body: {settings.max_body_bytes} bytes")
    click.echo(f"CORS origins: {', '.join(settings.cors_origins)}")
    for name, url in settings.api_base_urls.items():
        click.echo(f"{name} base: {url}")


def main():
    """Main entry point"""
    cli()


if __name__ == "__main__":
    main()
