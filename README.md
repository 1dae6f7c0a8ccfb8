# chatplugins

Building blocks for a group-chat bot. Each module holds the logic of one
plugin and knows nothing of any bot framework: functions take plain values
and return text, URLs or data, so they can be wired into whatever message
loop you run.

## Modules

| Module | Purpose |
| --- | --- |
| `chatplugins.timer` | `Timer`, a reminder whose month, day, weekday, hour and minute are packed into one integer; `filled_timer` and `filled_cron_timer` build one from command pieces; `chinese_num_to_int` reads Chinese numerals |
| `chatplugins.schedule` | `next_wake_time` works out when a date-based timer should next wake, `is_due` whether it fires at a given moment |
| `chatplugins.gist` | `MemberStore` (SQLite) and `check_new_user`, which approves a join request when a gist holds a fresh Unix timestamp |
| `chatplugins.welcome` | `WelcomeStore` (SQLite) for join/leave templates, `welcome_to_cq` to fill their placeholders, the newcomer quiz (`make_quiz`, `check_answer`) and `toggle_flag` |
| `chatplugins.moyu` | `Holiday`, `parse_holiday`, `weekend_message` and `daily_message` for the daily slacker's reminder |
| `chatplugins.hyaku` | `load_poems` reads the Hyakunin Isshu CSV into `Poem` records; `get_poem` and `image_urls` |
| `chatplugins.nsfw` | `judge` and `auto_judge` turn classifier `Scores` into a short verdict |
| `chatplugins.midicreate` | `make_midi` writes a melody string as MIDI, `midi_to_text` reads one back, `render_wav`/`str_to_music` render audio |
| `chatplugins.nbnhhsh` | `guess` asks what a pinyin abbreviation stands for |
| `chatplugins.github` | `search_repositories`, `describe_repo` and `opengraph_url` |
| `chatplugins.juejuezi` | `split_input` and `request_text` for the "绝绝子" sentence generator |
| `chatplugins.image_finder` | `search` for illustrations by keyword and `format_illust` for their caption |
| `chatplugins.jandan` | `PictureStore` (SQLite), `scrape_page` and `update`, which walks the picture board back until a known picture |
| `chatplugins.hearthstone` | `search_cards` and `deck_image` |
| `chatplugins.nativesetu` | `SetuLibrary`, a local picture library with one table per folder, keyed by `difference_hash` |
| `chatplugins.nativewife` | `WifeGallery`, per-group picture folders with a daily per-user `draw` |

## Requirements

Python 3.10 or later, with `requests`, `mido`, `pillow` and `lxml`.
`render_wav` and `str_to_music` also need the `timidity` program on the
`PATH`.

## Examples

Chinese numerals as reminder commands use them:

```python
from chatplugins.timer import chinese_num_to_int

chinese_num_to_int("十二")   # 12
chinese_num_to_int("每")     # -1, meaning "every"
```

A reminder at 8:30 on 25 December, and when it next wakes:

```python
from datetime import datetime
from chatplugins.timer import filled_timer
from chatplugins.schedule import next_wake_time

ts = filled_timer(["", "12", "25日", "八", "三十", "", "Merry Christmas"], 0, 0, False)
ts.month, ts.day, ts.hour, ts.minute   # (12, 25, 8, 30)
ts.timer_id()                           # stable id derived from the schedule
next_wake_time(ts, datetime.now())
ts.render()                             # message segments: @all, the alert text
```

A note name as a MIDI note number:

```python
from chatplugins.midicreate import parse_note

parse_note("C5")   # 60
```

Errors are raised as exceptions: invalid input raises `ValueError`, missing
entries `LookupError`, and the web helpers raise on failed requests
(`github.net_get` also on any status other than 200).

## What the package does not do

- It does not connect to a chat service or send messages; callers pass the
  text in and send what comes back.
- It has no clock that keeps, persists, lists, runs or cancels timers, and
  no cron support: `Timer` holds a cron string and `filled_cron_timer`
  builds one, but nothing here evaluates it. `schedule` only computes wake
  times and due checks for date-based timers.
- It does not parse group-management commands (bans, kicks, cards, titles,
  forwarding).

## Running the tests

Install the `test` extra and run `pytest` from the project directory.