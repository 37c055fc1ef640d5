"""CLI application for web-processor."""

import json

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from selenium import webdriver
from selenium.common.exceptions import WebDriverException

from web_processor.browser.selectors import Selector
from web_processor.core.config import Config
from web_processor.core.exceptions import WebProcessorError
from web_processor.core.log_setup import setup_logging
from web_processor.processor import WebProcessor

app = typer.Typer(
    name="web-processor",
    help="web-processor - deadline-bounded browser automation on Selenium",
    no_args_is_help=True,
)

console = Console()


def get_config() -> Config:
    """Load and validate configuration from the environment."""
    try:
        config = Config.from_env()
        config.validate()
        return config
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def connect(remote_url: str) -> webdriver.Remote:
    """Attach to a running Selenium endpoint."""
    return webdriver.Remote(command_executor=remote_url, options=webdriver.ChromeOptions())


def print_result(result: dict, title: str = "Result") -> None:
    """Print result as formatted JSON."""
    console.print(Panel(
        json.dumps(result, indent=2, default=str),
        title=title,
        border_style="green",
    ))


@app.command("check")
def check(
    url: str = typer.Option(..., "--url", "-u", help="Page to load"),
    remote_url: str = typer.Option(
        "", "--remote-url", "-r", help="Selenium endpoint (default: WEBP_REMOTE_URL)"
    ),
    css: str = typer.Option("", "--css", "-c", help="CSS selector to wait for"),
    timeout: float = typer.Option(0.0, "--timeout", "-t", help="Seconds to wait for the selector"),
    retries: int = typer.Option(0, "--retries", help="Navigation attempts (default: config)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Load a page through a remote browser and check that a selector shows up."""
    config = get_config()
    setup_logging(config.log_level)

    endpoint = remote_url or config.remote_url
    if not endpoint:
        console.print("[red]Error:[/red] no Selenium endpoint given")
        console.print("\n[yellow]Pass --remote-url or set:[/yellow]")
        console.print("  export WEBP_REMOTE_URL='http://localhost:4444'")
        raise typer.Exit(1)

    try:
        driver = connect(endpoint)
    except WebDriverException as e:
        console.print(f"[red]Error:[/red] could not connect to {endpoint}: {e.msg}")
        raise typer.Exit(1)

    result: dict = {"url": url, "selector": css or None}
    try:
        with WebProcessor(driver, config) as processor:
            processor.go_to_url(url, http_retries=retries or None)
            result["current_url"] = driver.current_url
            result["tab"] = processor.current_tab

            if css:
                element = processor.find_element(Selector.css(css), timeout or None)
                result["text"] = element.text
    except WebProcessorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    finally:
        driver.quit()

    if json_output:
        console.print(json.dumps(result, indent=2, default=str))
    else:
        print_result(result, "Check Result")


@app.command("info")
def show_info() -> None:
    """Show the effective timing configuration."""
    config = get_config()

    table = Table(title="web-processor Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")
    table.add_column("Environment", style="green")

    table.add_row("Default timeout", f"{config.default_timeout}s", "WEBP_DEFAULT_TIMEOUT")
    table.add_row("Poll interval", f"{config.poll_interval}s", "WEBP_POLL_INTERVAL")
    table.add_row("Navigation attempts", str(config.http_attempts), "WEBP_HTTP_ATTEMPTS")
    table.add_row("Retry delay", f"{config.retry_delay}s", "WEBP_RETRY_DELAY")
    table.add_row(
        "Indefinite timeout",
        f"{config.indefinite_timeout / 86400:g} days",
        "WEBP_INDEFINITE_TIMEOUT",
    )
    table.add_row("Log level", config.log_level, "WEBP_LOG_LEVEL")

    console.print(table)


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from web_processor import __version__
    console.print(f"web-processor v{__version__}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
