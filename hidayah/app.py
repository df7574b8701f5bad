# hidayah/app.py
import sys
from time import sleep
from typing import Optional, Tuple

from colorama import Fore, Style, init

from .audio_manager import AudioManager
from .exceptions import WebhookError
from .hadith_api_client import HadithAPIClient
from .hadith_browser import HadithBrowser
from .notifications import Notifier
from .quran_api_client import QuranAPIClient
from .quran_reader import QuranReader
from .registry import COLLECTIONS, SURAHS, TOTAL_JUZ, find_surahs_by_name
from .settings import Settings
from .ui import THEME_COLORS, UI
from .webhook_client import WebhookClient


def parse_command(user_input: str) -> Tuple[str, str]:
    """Split 'cmd rest of line' into ('cmd', 'rest of line'); the command is lower-cased."""
    parts = user_input.strip().split(None, 1)
    if not parts:
        return "", ""
    return parts[0].lower(), parts[1].strip() if len(parts) > 1 else ""


class HidayahApp:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.notifier = Notifier()
        self.ui = UI(reading_config=self.settings.reading_config)
        timeout = self.settings.request_timeout

        self.hadith_browser = HadithBrowser(
            HadithAPIClient(timeout=timeout, chapter_api_url=self.settings.get("chapter_api_url", "")),
            notifier=self.notifier,
            page_size=self.settings.page_size,
            collection=self.settings.get("last_collection") or COLLECTIONS[0].value,
        )
        self.audio_manager: Optional[AudioManager] = None
        self.quran_reader: Optional[QuranReader] = None
        self._quran_client = QuranAPIClient(timeout=timeout)
        self.webhook = WebhookClient(self.settings.get("webhook_url", ""), timeout=timeout)

    def _reader(self) -> QuranReader:
        # The mixer is only started once the Qur'an screen is opened
        if self.quran_reader is None:
            if self.audio_manager is None:
                self.audio_manager = AudioManager()
            self.quran_reader = QuranReader(self._quran_client, self.audio_manager, notifier=self.notifier)
        return self.quran_reader

    def _pause(self, seconds: float = 1.5):
        sleep(seconds)

    def _screen(self):
        self.ui.clear_terminal()
        self.ui.display_header(self.settings.get("theme_color", "green"))

    # --- Home ---
    def run(self):
        commands = [
            ("quran/qr", "Read the Holy Qur'an"),
            ("hadith/hd", "Browse Hadith collections"),
            ("settings/st", "Translations, page size and theme"),
            ("clearaudio/clr", "Clear downloaded recitation clips"),
            ("quit/q", "Exit the application"),
        ]
        while True:
            self._screen()
            print(Style.BRIGHT + Fore.GREEN + "بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ".center(40) + Style.RESET_ALL)
            self.ui.display_menu("🕌 Your Islamic Spiritual Companion", commands)
            try:
                cmd, _ = parse_command(self.ui.prompt("Enter command:"))
            except KeyboardInterrupt:
                print(Fore.YELLOW + "\n\n⚠ To exit, please type 'quit'.")
                self._pause()
                continue

            if cmd in ('quit', 'exit', 'q'):
                print(Fore.GREEN + "\n✨ May Allah accept our efforts and guide us all. Ameen.")
                if self.quran_reader:
                    self.quran_reader.player.reset()
                return
            elif cmd in ('quran', 'qr'):
                self.quran_menu()
            elif cmd in ('hadith', 'hd'):
                self.hadith_menu()
            elif cmd in ('settings', 'st'):
                self.settings_menu()
            elif cmd in ('clearaudio', 'clr'):
                self._clear_audio_cache()
            elif cmd:
                print(Fore.RED + "Invalid command.")
                self._pause(1)

    # --- Qur'an ---
    def quran_menu(self):
        reader = self._reader()
        commands = [
            ("1-114", "Select Surah by number"),
            ("Surah Name", "Search Surah (e.g., 'Rahman')"),
            ("juz <1-30>", "Open the first Surah starting in a Juz"),
            ("list/ls", "Display list of Surahs"),
            ("back/b", "Return to main menu"),
        ]
        while True:
            self._screen()
            self.ui.display_menu("📖 Select Surah", commands)
            try:
                user_input = self.ui.prompt("Enter command:")
            except KeyboardInterrupt:
                return
            cmd, arg = parse_command(user_input)

            if cmd in ('back', 'b', 'q'):
                reader.player.reset()
                return
            elif cmd in ('list', 'ls'):
                self._display_surah_list()
                continue
            elif cmd == 'juz':
                if not arg.isdigit() or not 1 <= int(arg) <= TOTAL_JUZ:
                    print(Fore.RED + f"Enter a Juz between 1-{TOTAL_JUZ}.")
                    self._pause(1)
                    continue
                loaded = reader.select_juz(int(arg))
            elif cmd.isdigit():
                loaded = reader.select_surah(int(cmd))
            elif cmd:
                number = self._pick_surah_by_name(user_input)
                if number is None:
                    continue
                loaded = reader.select_surah(number)
            else:
                continue

            if loaded:
                self.surah_view(reader)
            else:
                self._pause()

    def _pick_surah_by_name(self, query: str) -> Optional[int]:
        matches = find_surahs_by_name(query)
        if not matches:
            print(Fore.RED + "Invalid input. Enter a number between 1-114 or a Surah name.")
            self._pause(1)
            return None
        print(Fore.RED + "\n╭─" + Style.BRIGHT + Fore.MAGENTA + "🤔 Did you mean one of these?")
        for idx, surah in enumerate(matches, 1):
            print(f"{Fore.RED}├ {Fore.GREEN}{idx}. {Fore.CYAN}{surah.label}")
        print(Fore.RED + "╰" + "─" * 38)
        choice = self.ui.prompt("Select a number from the list, or Enter to retry:")
        if choice.isdigit() and 1 <= int(choice) <= len(matches):
            return matches[int(choice) - 1].number
        return None

    def _display_surah_list(self):
        self._screen()
        columns = 4
        per_column = (len(SURAHS) + columns - 1) // columns
        for row in range(per_column):
            cells = []
            for col in range(columns):
                idx = row + col * per_column
                if idx < len(SURAHS):
                    cells.append(Fore.GREEN + f"{SURAHS[idx].label}".ljust(26))
            print("".join(cells))
        input(Fore.YELLOW + "\nPress Enter to return to the surah selection...")

    def surah_view(self, reader: QuranReader):
        data = reader.data
        page_size = max(1, (self.ui.term_size.lines - 10) // 8)
        total_pages = max(1, -(-len(data.verses) // page_size))
        page = 1
        commands = [
            ("n/p", "Next / previous page"),
            ("a", "Play / pause complete Surah"),
            ("s", "Stop recitation"),
            ("t", "Show tafsir"),
            ("w <ayah>", "Ask the lookup service about an ayah"),
            ("q", "Return"),
        ]
        while True:
            self.ui.clear_terminal()
            self.ui.display_surah_info(data)
            self.ui.display_verse_page(data, page, page_size, reader.playing_ayah)
            progress = self.audio_manager.get_progress_bar() if reader.player.is_playing and self.audio_manager else ""
            print(self.ui.audio_status(reader.player.state.value, reader.playing_ayah,
                                       data.info.number_of_ayahs, progress))
            self.ui.display_menu("🧭 Navigation", commands)
            try:
                cmd, arg = parse_command(self.ui.prompt())
            except KeyboardInterrupt:
                reader.stop_audio()
                return

            if cmd == 'n' and page < total_pages:
                page += 1
            elif cmd == 'p' and page > 1:
                page -= 1
            elif cmd == 'a':
                reader.toggle_audio()
            elif cmd == 's':
                reader.stop_audio()
            elif cmd == 't':
                self.ui.display_tafsir(data)
                input(Fore.YELLOW + "\nPress Enter to continue...")
            elif cmd == 'w' and arg.isdigit():
                self._webhook_lookup(self.webhook.lookup_verse, data.info.number, int(arg))
            elif cmd == 'q':
                reader.stop_audio()
                return
            elif not cmd:
                if page < total_pages:
                    page += 1

    # --- Hadith ---
    def hadith_menu(self):
        browser = self.hadith_browser
        commands = [
            ("load/l", "Load the selected collection"),
            ("collection/c <id>", "Select collection (" + ", ".join(c.value for c in COLLECTIONS) + ")"),
            ("chapter/ch <n>", "Load a single chapter"),
            ("search/s <text>", "Filter by text, number or narrator"),
            ("clear", "Clear the search"),
            ("n/p, page/g <n>", "Next / previous / go to page"),
            ("ask/w <text>", "Ask the lookup service"),
            ("back/b", "Return to main menu"),
        ]
        while True:
            self._screen()
            self.ui.display_hadith_page(browser.view(), browser.collection, browser.query)
            self.ui.display_menu("🧭 Hadith Commands", commands)
            try:
                cmd, arg = parse_command(self.ui.prompt())
            except KeyboardInterrupt:
                return

            if cmd in ('back', 'b', 'q'):
                return
            elif cmd in ('load', 'l'):
                browser.load()
                self._pause()
            elif cmd in ('collection', 'c'):
                try:
                    collection = browser.select_collection(arg)
                except ValueError:
                    print(Fore.RED + f"Unknown collection '{arg}'.")
                    self._pause(1)
                    continue
                self.settings.set("last_collection", collection.value)
                browser.load()
                self._pause()
            elif cmd in ('chapter', 'ch'):
                if not arg.isdigit():
                    print(Fore.RED + "Enter a chapter number.")
                    self._pause(1)
                    continue
                browser.load(chapter=int(arg))
                self._pause()
            elif cmd in ('search', 's'):
                browser.set_query(arg)
            elif cmd == 'clear':
                browser.set_query("")
            elif cmd == 'n':
                browser.next_page()
            elif cmd == 'p':
                browser.previous_page()
            elif cmd in ('page', 'g') and arg.lstrip('-').isdigit():
                browser.go_to_page(int(arg))
            elif cmd in ('ask', 'w'):
                self._webhook_lookup(self.webhook.lookup_hadith, browser.collection.value, arg)

    def _webhook_lookup(self, lookup, *args):
        if not self.webhook.enabled:
            self.notifier.error("Lookup service not configured", "Set 'webhook_url' in settings")
            self._pause()
            return
        try:
            record = lookup(*args)
        except WebhookError:
            self.notifier.error("Error contacting lookup service", "Please try again")
            self._pause()
            return
        self.ui.display_webhook_record(record)
        input(Fore.YELLOW + "\nPress Enter to continue...")

    # --- Settings ---
    def settings_menu(self):
        commands = [
            ("arabic/ar", "Toggle Arabic text"),
            ("english/en", "Toggle English translation"),
            ("urdu/ur", "Toggle Urdu translation"),
            ("pagesize/ps <n>", "Hadiths per page"),
            ("theme/th <color>", "Header color (" + ", ".join(THEME_COLORS) + ")"),
            ("back/b", "Return to main menu"),
        ]
        toggles = {'arabic': 'show_arabic', 'ar': 'show_arabic', 'english': 'show_english',
                   'en': 'show_english', 'urdu': 'show_urdu', 'ur': 'show_urdu'}
        while True:
            self._screen()
            config = self.settings.reading_config
            for key in ("show_arabic", "show_english", "show_urdu"):
                state = Fore.GREEN + "ON" if config.get(key, True) else Fore.RED + "OFF"
                print(f"{Fore.CYAN}{key:<14}{state}{Style.RESET_ALL}")
            print(f"{Fore.CYAN}{'page_size':<14}{Fore.WHITE}{self.settings.page_size}")
            self.ui.display_menu("⚙️ Settings", commands)
            try:
                cmd, arg = parse_command(self.ui.prompt())
            except KeyboardInterrupt:
                return

            if cmd in ('back', 'b', 'q'):
                return
            elif cmd in toggles:
                self.settings.toggle_reading(toggles[cmd])
            elif cmd in ('pagesize', 'ps') and arg.isdigit() and int(arg) > 0:
                self.settings.set("page_size", int(arg))
                self.hadith_browser.page_size = int(arg)
                self.hadith_browser.page = 1
            elif cmd in ('theme', 'th') and arg.lower() in THEME_COLORS:
                self.settings.set("theme_color", arg.lower())
            elif cmd:
                print(Fore.RED + "Invalid choice.")
                self._pause(1)

    def _clear_audio_cache(self):
        manager = self.audio_manager or AudioManager()
        self.audio_manager = manager
        removed = manager.clear_cache()
        print(Fore.GREEN + f"\n✓ Removed {removed} cached clip(s).")
        self._pause()


def main():
    init(autoreset=True)
    try:
        HidayahApp().run()
        sys.exit(0)
    except KeyboardInterrupt:
        print(Style.BRIGHT + Fore.YELLOW + "\n⚠ Interrupted. As-salamu alaykum!")
        sys.exit(1)
