# hidayah/ui.py
import os
import shutil
import sys
from typing import List, Optional, Tuple

import arabic_reshaper
from bidi.algorithm import get_display
from colorama import Fore, Style

from .models import Collection, Hadith, PagedView, SurahData, Verse, WebhookRecord
from .utils import strip_ansi, wrap_text

HIDAYAH_ASCII = r"""
 _   _ _     _                   _
| | | (_) __| | __ _ _   _  __ _| |__
| |_| | |/ _` |/ _` | | | |/ _` | '_ \
|  _  | | (_| | (_| | |_| | (_| | | | |
|_| |_|_|\__,_|\__,_|\__, |\__,_|_| |_|
                     |___/   Hub CLI
"""

THEME_COLORS = {
    'red': Fore.RED, 'white': Fore.WHITE, 'green': Fore.GREEN, 'blue': Fore.BLUE,
    'yellow': Fore.YELLOW, 'magenta': Fore.MAGENTA, 'cyan': Fore.CYAN,
}


def fix_arabic_text(text: str) -> str:
    """Reshape and apply the BiDi algorithm so Arabic/Urdu reads right in a terminal."""
    if not text:
        return ""
    try:
        return str(get_display(arabic_reshaper.reshape(text)))
    except Exception as e:
        print(f"{Fore.YELLOW}Warning: Error processing Arabic text ('{text[:20]}...'): {e}{Style.RESET_ALL}",
              file=sys.stderr)
        return text


class UI:
    def __init__(self, reading_config: Optional[dict] = None, term_size=None):
        self.reading_config = reading_config if reading_config is not None else {}
        self.term_size = term_size or shutil.get_terminal_size()

    @property
    def width(self) -> int:
        return max(40, self.term_size.columns)

    def clear_terminal(self):
        os.system('cls' if os.name == 'nt' else 'clear')

    def display_header(self, theme_color: str = 'green'):
        color = THEME_COLORS.get(theme_color, Fore.GREEN)
        print(color + Style.BRIGHT + HIDAYAH_ASCII + Style.RESET_ALL)

    def display_menu(self, title: str, commands: List[Tuple[str, str]]):
        """Boxed command list with the colons lined up."""
        max_cmd_len = max(len(strip_ansi(cmd)) for cmd, _ in commands)
        print(Fore.RED + "╭─ " + Style.BRIGHT + Fore.GREEN + title)
        for cmd, desc in commands:
            pad = " " * (max_cmd_len - len(strip_ansi(cmd)))
            print(Fore.RED + f"│ → {Fore.CYAN}{cmd}{pad}{Style.RESET_ALL} : {Style.NORMAL}{Fore.WHITE}{desc}{Style.RESET_ALL}")
        print(Fore.RED + "╰" + "─" * 38)

    def prompt(self, label: str = "") -> str:
        if label:
            print(Style.BRIGHT + Fore.GREEN + f"\n{label}" + Style.DIM + Fore.WHITE)
        return input(Fore.RED + "  ❯ " + Fore.WHITE).strip()

    def _print_block(self, heading: str, text: str, color=Fore.MAGENTA, rtl: bool = False):
        print(Style.BRIGHT + color + heading + Style.NORMAL + Fore.WHITE)
        body = fix_arabic_text(text) if rtl else text
        if rtl:
            # Wrapping reshaped text breaks word order, print it as one block
            print("    " + body)
            return
        for line in wrap_text(body, self.width - 4).split('\n'):
            print("    " + line)

    # --- Hadith ---
    def display_single_hadith(self, hadith: Hadith):
        print(Style.BRIGHT + Fore.RED + "─" * min(60, self.width))
        print(Style.DIM + Fore.WHITE + hadith.book + Style.RESET_ALL)
        if hadith.section:
            print(Style.BRIGHT + Fore.GREEN + hadith.section + Style.RESET_ALL)
        badges = f"{Fore.CYAN}Hadith #{hadith.hadith_number}"
        if hadith.reference:
            badges += f"{Fore.WHITE} • {hadith.reference}"
        if hadith.grade:
            badges += f"{Fore.YELLOW} • {hadith.grade}"
        print(badges + Style.RESET_ALL)

        if hadith.arabic_text and self.reading_config.get("show_arabic", True):
            self._print_block("\nArabic (العربية):", hadith.arabic_text, Fore.RED, rtl=True)
        if hadith.narrator:
            print(Style.BRIGHT + Fore.CYAN + "\nNarrator: " + Style.NORMAL + Fore.WHITE + hadith.narrator)
        if hadith.english_text and self.reading_config.get("show_english", True):
            self._print_block("\nEnglish Translation:", hadith.english_text)
        if hadith.urdu_text and self.reading_config.get("show_urdu", True):
            self._print_block("\nUrdu Translation (اردو):", hadith.urdu_text, rtl=True)
        print()

    def display_hadith_page(self, view: PagedView, collection: Collection, query: str = ""):
        print(Style.BRIGHT + Fore.RED + "=" * self.width)
        print(f"📚 {collection.label}")
        if query:
            print(f"🔎 Search: {query} ({view.total_matches} matches)")
        if view.total_pages:
            print(f"Page {view.page} of {view.total_pages}")
        print(Style.BRIGHT + Fore.RED + "=" * self.width)

        if not view.records:
            if query:
                print(Fore.YELLOW + f'\nNo hadiths found matching "{query}"')
            else:
                print(Fore.YELLOW + f"\nSelect a collection and load it to begin ({collection.label}).")
            return
        for hadith in view.records:
            self.display_single_hadith(hadith)

    def display_webhook_record(self, record: WebhookRecord):
        print(Style.BRIGHT + Fore.RED + "─" * min(60, self.width))
        if record.reference:
            print(Fore.CYAN + record.reference)
        if record.grade:
            print(Fore.YELLOW + record.grade)
        if record.narrator:
            print(Style.BRIGHT + Fore.CYAN + "Narrator: " + Style.NORMAL + Fore.WHITE + record.narrator)
        if record.chain:
            self._print_block("\nChain:", record.chain, Fore.GREEN)
        if record.text:
            self._print_block("\nText:", record.text)
        if not any((record.text, record.reference, record.narrator, record.chain, record.grade)):
            print(Fore.YELLOW + "The lookup service returned an empty record.")

    # --- Qur'an ---
    def display_surah_info(self, data: SurahData):
        info = data.info
        print(Fore.RED + "╭─ " + Style.BRIGHT + Fore.GREEN + "📜 Surah Information")
        print(Fore.RED + f"│ • {Fore.CYAN}Name:       {Fore.WHITE}{info.english_name}")
        print(Fore.RED + f"│ • {Fore.CYAN}Arabic:     {Fore.WHITE}{fix_arabic_text(info.name)}")
        print(Fore.RED + f"│ • {Fore.CYAN}Translation:{Fore.WHITE} {info.english_name_translation}")
        print(Fore.RED + f"│ • {Fore.CYAN}Type:       {Fore.WHITE}{info.revelation_type}")
        print(Fore.RED + f"│ • {Fore.CYAN}Total Ayahs:{Fore.WHITE} {info.number_of_ayahs}")
        print(Fore.RED + "╰" + "─" * 52)

    def display_single_verse(self, verse: Verse, playing: bool = False):
        marker = f" {Fore.YELLOW}🔊" if playing else ""
        print(Style.BRIGHT + Fore.GREEN + f"\n[{verse.number}]{marker}")
        if verse.arabic and self.reading_config.get("show_arabic", True):
            self._print_block("Arabic:", verse.arabic, Fore.RED, rtl=True)
        if verse.urdu and self.reading_config.get("show_urdu", True):
            self._print_block("\nUrdu Translation:", verse.urdu, rtl=True)
        if verse.english and self.reading_config.get("show_english", True):
            self._print_block("\nEnglish Translation:", verse.english)
        print(Style.BRIGHT + Fore.GREEN + "\n" + "-" * min(40, self.width))

    def display_verse_page(self, data: SurahData, page: int, page_size: int, playing_ayah: Optional[int] = None):
        total = max(1, -(-len(data.verses) // page_size))
        print(Style.BRIGHT + Fore.RED + "=" * self.width)
        print(f"📖 Surah {data.info.number}: {data.info.english_name}")
        print(f"Page {page}/{total}")
        print(Style.BRIGHT + Fore.RED + "=" * self.width)
        start = (page - 1) * page_size
        for verse in data.verses[start:start + page_size]:
            self.display_single_verse(verse, playing=playing_ayah == verse.number)

    def display_tafsir(self, data: SurahData):
        if data.tafsir:
            self._print_block("\nTafsir (Commentary):", data.tafsir, Fore.YELLOW)

    def audio_status(self, state_name: str, ayah: Optional[int], total: int, progress: str = "") -> str:
        if state_name == "playing" and ayah:
            status = f"{Fore.GREEN}▶ Reciting ayah {ayah}/{total}{Style.RESET_ALL}"
            return f"{status}  {progress}" if progress else status
        if state_name == "paused":
            return f"{Fore.YELLOW}⏸ Recitation paused{Style.RESET_ALL}"
        if state_name == "finished":
            return f"{Fore.CYAN}✓ Recitation finished{Style.RESET_ALL}"
        return f"{Style.DIM}Recitation stopped{Style.RESET_ALL}"
