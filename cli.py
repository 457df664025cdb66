# cli.py - interactive catalog browser
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.pycatalog import CatalogClient, CatalogAPIError

console = Console()
c = CatalogClient(
    base_url=os.getenv("CATALOG_URL", "http://127.0.0.1:3000"),
    api_key=os.getenv("API_KEY", "mysecretkey123"),
)

status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Description", width=32)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("In stock", justify="center", width=9)

    for p in products:
        in_stock = "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]"
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            p.get("description", ""),
            f"${float(p.get('price', 0)):.2f}",
            p.get("category", "N/A"),
            in_stock,
        )
    console.print(table)


def show_page(page: Dict[str, Any]):
    title = f"📦 Products (page {page.get('page')} · {len(page.get('results', []))} of {page.get('total')})"
    show_products(page.get("results", []), title=title)


def show_stats(stats: Dict[str, Any]):
    table = Table(box=box.ROUNDED, header_style="bold yellow", show_lines=False)
    table.add_column("Category", width=20)
    table.add_column("Products", justify="right", width=10)
    for category, count in stats.get("countByCategory", {}).items():
        table.add_row(category, str(count))
    console.print(Panel(table, title=f"📊 {stats.get('totalProducts', 0)} products", border_style="yellow"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner. API and connection errors
    are shown in the status panel and turned into a None result.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except CatalogAPIError as e:
        status_message = f"Error: {e.message}"
        console.print(show_status(status_message, False))
        return None
    except OSError as e:
        # connection refused, DNS failure, timeouts (requests errors are OSErrors)
        status_message = f"Error: {e}"
        console.print(show_status(status_message, False))
        return None

    if success_msg:
        status_message = success_msg
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_product_cache():
    global product_cache
    page = try_api(c.list_products, limit=1000)
    product_cache = page["results"] if page else []


def get_product_completer():
    if not product_cache:
        refresh_product_cache()
    ids = [p.get("id", "") for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def get_category_completer():
    if not product_cache:
        refresh_product_cache()
    return WordCompleter(sorted({p.get("category", "") for p in product_cache}), ignore_case=True)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Product Catalog",
        "[bold blue]Catalog CLI with Autocomplete[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: Optional[float] = 10.0) -> Optional[float]:
    # empty answer means "no value" when default is None
    while True:
        raw = Prompt.ask(message, default="" if default is None else str(default))
        if raw == "" and default is None:
            return None
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_optional(message: str) -> Optional[str]:
    raw = prompt_with_autocomplete(f"{message} (blank to keep)").strip()
    return raw or None


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_product_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "✏️ Update product"),
            ("2", "🔍 Search / filter", "6", "🗑️ Delete product"),
            ("3", "ℹ️ Get product by ID", "7", "📊 Stats"),
            ("4", "➕ Create product", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            page = IntPrompt.ask("Page", default=1)
            limit = IntPrompt.ask("Page size", default=3)
            resp = try_api(c.list_products, page=page, limit=limit, success_msg="Products loaded")
            if resp:
                show_page(resp)

        elif choice == "2":
            term = prompt_with_autocomplete("Name contains (blank for any)").strip() or None
            category = prompt_with_autocomplete("Category (blank for any)", completer=get_category_completer()).strip() or None
            resp = try_api(c.list_products, category=category, search=term, limit=1000, success_msg="Search completed")
            if resp:
                show_page(resp)

        elif choice == "3":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
            resp = try_api(c.get_product, pid, success_msg=f"Product {pid} loaded")
            if resp:
                show_products([resp])

        elif choice == "4":
            name = prompt_with_autocomplete("Product name")
            description = prompt_with_autocomplete("Description")
            price = ask_float("💰 Price", default=10.0)
            category = prompt_with_autocomplete("🏷️ Category", completer=get_category_completer())
            in_stock = Confirm.ask("In stock?", default=True)
            resp = try_api(
                c.create_product, name, description, price, category, in_stock,
                success_msg=f"Product '{name}' created"
            )
            if resp:
                show_products([resp])
                refresh_product_cache()

        elif choice == "5":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
            name = ask_optional("New name")
            description = ask_optional("New description")
            price = ask_float("New price (blank to keep)", default=None)
            category = ask_optional("New category")
            in_stock = None
            if Confirm.ask("Change stock status?", default=False):
                in_stock = Confirm.ask("In stock?", default=True)
            resp = try_api(
                c.update_product, pid, name, description, price, category, in_stock,
                success_msg=f"Product {pid} updated"
            )
            if resp:
                show_products([resp])
                refresh_product_cache()

        elif choice == "6":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                resp = try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                if resp:
                    show_products(resp.get("deleted", []), title="🗑️ Deleted")
                    refresh_product_cache()

        elif choice == "7":
            resp = try_api(c.stats, success_msg="Stats loaded")
            if resp:
                show_stats(resp)

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                return

        console.print()
        console.rule(style="dim")


def main():
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
