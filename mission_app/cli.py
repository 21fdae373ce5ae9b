# mission_app/cli.py
"""Main and mission menus. Input comes from an ``ask(prompt) -> str`` callable."""
import logging
from typing import Any, Callable, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from mission_app.errors import InvalidInputError, MissionAppError, StoreError
from mission_app.schemas.mission import MissionOut
from mission_app.schemas.user import UserOut
from mission_app.services.identity import IdentityManager
from mission_app.services.missions import MissionManager

logger = logging.getLogger(__name__)

Ask = Callable[[str], str]

MAIN_OPTIONS = {
    "1": "Create User",
    "2": "Login User",
    "3": "Exit",
}

MISSION_OPTIONS = {
    "1": "Create Mission",
    "2": "Join Mission",
    "3": "Start Mission",
    "4": "End Mission",
    "5": "List All Missions",
    "6": "Delete Mission",
    "7": "Back to Main Menu",
}


def parse_id(raw: str) -> int:
    raw = (raw or "").strip()
    try:
        return int(raw)
    except ValueError:
        raise InvalidInputError(f"Invalid mission ID: '{raw}'")


class MissionMenus:
    def __init__(
        self,
        identity: IdentityManager,
        missions: MissionManager,
        console: Optional[Console] = None,
        ask: Optional[Ask] = None,
    ):
        self.identity = identity
        self.missions = missions
        self.console = console or Console()
        self.ask = ask or (lambda prompt: Prompt.ask(prompt, console=self.console))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _menu(self, title: str, options: dict) -> str:
        self.console.print()
        self.console.print(f"[bold]=== {title} ===[/bold]")
        for key, label in options.items():
            self.console.print(f"{key}. {label}")
        return self.ask("Select option").strip()

    def _mission_table(self, title: str, rows: List[MissionOut]) -> None:
        table = Table(title=title, show_header=True, header_style="bold magenta")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Name", style="white")
        table.add_column("Status", style="yellow")
        table.add_column("Leader", style="green", justify="right")
        for m in rows:
            table.add_row(str(m.mission_id), escape(m.name), m.status.value, str(m.mission_leader_id))
        self.console.print(table)

    def _guarded(self, action: Callable[[], Any]) -> Any:
        """Run one menu action; on failure report it and return None."""
        try:
            return action()
        except StoreError as e:
            self.console.print(f"[red]Error: {escape(str(e))}[/red]")
        except MissionAppError as e:
            logger.info(f"[cli] {type(e).__name__}: {e}")
            self.console.print(f"[yellow]{escape(str(e))}[/yellow]")
        except (EOFError, KeyboardInterrupt):
            self.console.print()
            self.console.print("Cancelled.")
        return None

    # ------------------------------------------------------------------
    # Main menu
    # ------------------------------------------------------------------
    def run(self) -> None:
        while True:
            try:
                choice = self._menu("MAIN MENU", MAIN_OPTIONS)
            except (EOFError, KeyboardInterrupt):
                choice = "3"

            if choice == "1":
                self._guarded(self.create_user)
            elif choice == "2":
                user = self._guarded(self.login_user)
                if user is not None:
                    self.mission_menu(user)
            elif choice == "3":
                self.console.print("Goodbye!")
                return
            else:
                self.console.print("Invalid option!")

    def create_user(self) -> None:
        reg = self.identity.register(self.ask("Enter user name"))
        if not reg.created:
            self.console.print("User already exists!")
            return
        self.console.print(f"User created with ID: {reg.user.user_id}")

    def login_user(self) -> Optional[UserOut]:
        user = self.identity.authenticate(self.ask("Enter your username"))
        if user is None:
            self.console.print("User not found!")
            return None
        self.console.print(f"Logged in as {escape(user.name)} (ID: {user.user_id})")
        return user

    # ------------------------------------------------------------------
    # Mission menu
    # ------------------------------------------------------------------
    def mission_menu(self, user: UserOut) -> None:
        handlers = {
            "1": self.create_mission,
            "2": self.join_mission,
            "3": self.start_mission,
            "4": self.end_mission,
            "5": self.list_missions,
            "6": self.delete_mission,
        }
        while True:
            try:
                choice = self._menu("MISSION MENU", MISSION_OPTIONS)
            except (EOFError, KeyboardInterrupt):
                return
            if choice == "7":
                return
            handler = handlers.get(choice)
            if handler is None:
                self.console.print("Invalid option!")
                continue
            self._guarded(lambda: handler(user))

    def create_mission(self, user: UserOut) -> None:
        m = self.missions.create(user.user_id, self.ask("Enter mission name"))
        self.console.print(f'Mission "{escape(m.name)}" created with ID: {m.mission_id}')

    def join_mission(self, user: UserOut) -> None:
        rows = self.missions.joinable(user.user_id)
        if not rows:
            self.console.print("No available missions to join!")
            return
        self._mission_table("Available Missions", rows)
        mission_id = parse_id(self.ask("Enter mission ID to join"))
        if self.missions.join(user.user_id, mission_id):
            m = self.missions.get(mission_id)
            self.console.print(f"[green]You joined the mission! ({escape(m.name)})[/green]")
        else:
            self.console.print("You are already a member of this mission.")

    def start_mission(self, user: UserOut) -> None:
        rows = self.missions.startable(user.user_id)
        if not rows:
            self.console.print("No missions ready to start for this leader!")
            return
        self._mission_table("Your Missions", rows)
        mission_id = parse_id(self.ask("Enter mission ID to start"))
        self.missions.start(user.user_id, mission_id)
        self.console.print("[green]Mission started![/green]")

    def end_mission(self, user: UserOut) -> None:
        rows = self.missions.endable(user.user_id)
        if not rows:
            self.console.print("No missions in progress for you to end.")
            return
        self._mission_table("Your missions in progress", rows)
        mission_id = parse_id(self.ask("Enter mission ID to end"))
        report = self.missions.end(user.user_id, mission_id)

        self.console.print(f"[green]Mission {mission_id} ended (status = finished)[/green]")
        self.console.print("Members in this mission:")
        if not report.members:
            self.console.print("- (no members)")
        for member in report.members:
            self.console.print(f"- {escape(member.name)}")
        self.console.print(f"[bold]Mission result: {report.outcome.upper()}[/bold]")

    def list_missions(self, user: UserOut) -> None:
        rows = self.missions.list_all()
        if not rows:
            self.console.print("No missions found.")
            return
        self._mission_table("All Missions", rows)

    def delete_mission(self, user: UserOut) -> None:
        rows = self.missions.owned(user.user_id)
        if not rows:
            self.console.print("No missions to delete!")
            return
        self._mission_table("Your missions", rows)
        mission_id = parse_id(self.ask("Enter mission ID to delete"))
        m = self.missions.delete(user.user_id, mission_id)
        self.console.print(f'Mission "{escape(m.name)}" deleted!')
