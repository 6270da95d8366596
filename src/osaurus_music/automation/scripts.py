from __future__ import annotations

from .decoding import FIELD_DELIMITER, RECORD_DELIMITER

STOPPED_SENTINEL = "STOPPED"
NOT_FOUND_SENTINEL = "NOT_FOUND"


def escape_applescript_string(s: str) -> str:
    # Only double quotes are escaped before embedding in a string literal.
    return s.replace('"', '\\"')


def music_running_script(app: str = "Music") -> str:
    return f'tell application "System Events" to (name of processes) contains "{app}"'


def simple_command_script(command: str, app: str = "Music") -> str:
    return f'tell application "{app}" to {command}'


def set_volume_script(level: int, app: str = "Music") -> str:
    return f'tell application "{app}" to set sound volume to {level}'


def current_track_script(app: str = "Music") -> str:
    d = FIELD_DELIMITER
    return (
        f'tell application "{app}"\n'
        f'    if player state is stopped then return "{STOPPED_SENTINEL}"\n'
        f'    return name of current track & "{d}" & artist of current track & "{d}" & '
        f'album of current track & "{d}" & duration of current track & "{d}" & '
        f'player position & "{d}" & (player state as string)\n'
        f"end tell"
    )


def library_stats_script(app: str = "Music") -> str:
    return (
        f'tell application "{app}"\n'
        f'    return ((count of tracks of library playlist 1) as string) & "{FIELD_DELIMITER}" & '
        f"((count of playlists) as string)\n"
        f"end tell"
    )


def search_songs_script(query: str, limit: int, app: str = "Music") -> str:
    q = escape_applescript_string(query)
    d = FIELD_DELIMITER
    return (
        f'tell application "{app}"\n'
        f'    set searchResults to search library playlist 1 for "{q}" only songs\n'
        f"    set resultList to {{}}\n"
        f"    repeat with i from 1 to (count of searchResults)\n"
        f"        if i > {limit} then exit repeat\n"
        f"        set t to item i of searchResults\n"
        f'        set end of resultList to (name of t & "{d}" & artist of t & "{d}" & album of t)\n'
        f"    end repeat\n"
        f"    set AppleScript's text item delimiters to \"{RECORD_DELIMITER}\"\n"
        f"    return resultList as string\n"
        f"end tell"
    )


def play_song_script(song: str, app: str = "Music") -> str:
    s = escape_applescript_string(song)
    return (
        f'tell application "{app}"\n'
        f'    set searchResults to search library playlist 1 for "{s}" only songs\n'
        f"    if (count of searchResults) > 0 then\n"
        f"        play item 1 of searchResults\n"
        f'        return name of item 1 of searchResults & "{FIELD_DELIMITER}" & artist of item 1 of searchResults\n'
        f"    else\n"
        f'        return "{NOT_FOUND_SENTINEL}"\n'
        f"    end if\n"
        f"end tell"
    )
