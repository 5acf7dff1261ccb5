# wokkibot

Building blocks for a chat bot on community servers. Each module works on
its own and can be used from any bot framework.

| Module | What it provides |
| --- | --- |
| `wokkibot.config` | `Config`, `LavalinkConfig`, `WebConfig`, `load_config`, `save_config` for `config.json` |
| `wokkibot.models` | Data records `Command`, `Guild`, `Reminder`, `Statistics` (the last two build from database rows with `from_row`) |
| `wokkibot.utils` | Colour constants, `rgb_to_integer`, `capitalize_first_letter`, `extract_year`, `remove_diacritics`, `generate_random_name`, `maximum_file_size`, `replace_domain`, `format_duration`, `format_position` |
| `wokkibot.security` | `validate_url`, `validate_time_parameter`, `ValidationError` |
| `wokkibot.validator` | `AnswerValidator` for trivia answers, plus `clean_string`, `extract_number`, `parse_date`, `calculate_similarity`, `edit_distance` |
| `wokkibot.trivia_state` | `TriviaQuestion`, `Trivia`, `TriviaManager` (one game state per guild) |
| `wokkibot.minesweeper` | `Board` and `Cell`, `check_dimensions` |
| `wokkibot.queue` | `Queue` and `QueueManager` (one track queue per guild) |
| `wokkibot.download` | `yt-dlp`/`curl` download and `ffmpeg` conversion with progress reporting |
| `wokkibot.web_auth` | Discord OAuth2 helpers: `OAuthConfig`, `OAuthClient`, `DiscordUser`, `generate_random_state` |
| `wokkibot.importer` | Bulk import of names into a SQLite `names` table |

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

Video downloads need `yt-dlp`, `curl`, `ffmpeg` and `ffprobe` on the `PATH`.

## Configuration

`load_config` reads `config.json` from the working directory by default (a
different path may be passed), and `save_config` writes it back:

```json
{
  "token": "token",
  "guildid": "",
  "trivia_token": "",
  "admins": [],
  "lavalink": {"enabled": false, "nodes": []},
  "web": {
    "client_id": "placeholder",
    "client_secret": "secret",
    "redirect_uri": "http://localhost:3000/callback"
  }
}
```

## Command-line tool

Import a newline-separated list of names into the `names` table of a SQLite
database. The table is created if missing, blank lines are skipped and
duplicates are ignored:

```
wokkibot-import wokkibot.db names.txt
```

## Library use

```python
from wokkibot.minesweeper import Board
from wokkibot.validator import AnswerValidator
from wokkibot.queue import QueueManager
from wokkibot.utils import format_position

board = Board(8, 8, 10, "1234")
board.move_right()
hit_mine = board.reveal()          # True if the cell was a mine; the game ends
print(board.render())

AnswerValidator("Albert Einstein").validate("einstein")   # True

queues = QueueManager()
queue = queues.get(42)
queue.add("track one", "track two")
queue.next()                       # "track one"

format_position(125_000)           # "2:05"
```

Video downloads:

```python
from wokkibot.download import Downloader, DownloadTask, DownloadError, validate_request

url = validate_request("https://example.com/video", start="1:30", end="2:00")
task = DownloadTask(url=url, max_file_size=10)
try:
    name, data = Downloader(progress=print).process(task)
except DownloadError as exc:
    print(exc.title, exc.message)
```

`Downloader.process` removes the task's temporary directory under
`downloads/` when it finishes, whether it succeeded or not.

## What this package does not do

- It does not connect to a chat service or respond to messages; the modules
  are meant to be called from a bot you write.
- It has no database layer of its own. Apart from `wokkibot-import`, nothing
  reads or writes SQLite: custom commands, reminders, statistics, pizza
  toppings and clips must be stored by your code.
- It does not run a web server. `wokkibot.web_auth` only builds the
  authorization URL, exchanges codes and fetches the user; sessions and
  routes are left to you.
- It does not play audio; `wokkibot.queue` only keeps the order of tracks.