"""Writing simple melodies as MIDI, reading them back, and rendering audio."""

from __future__ import annotations

import io
import math
import os
import subprocess
from typing import Iterator

import mido

NOTE_MAP = {
    "C": 60,
    "Db": 61,
    "D": 62,
    "Eb": 63,
    "E": 64,
    "F": 65,
    "Gb": 66,
    "G": 67,
    "Ab": 68,
    "A": 69,
    "Bb": 70,
    "B": 71,
}

TICKS_PER_QUARTER = 960
TEMPO_BPM = 72
VIOLIN_PROGRAM = 40
VELOCITY = 120
DEFAULT_LEVEL = 5

_ORD_A, _ORD_G = ord("A"), ord("G")
_ORD_0, _ORD_9 = ord("0"), ord("9")


def note_name(n: int) -> str:
    """Name of the pitch class of MIDI note ``n``."""
    for name, value in NOTE_MAP.items():
        if value % 12 == n % 12:
            return name
    return ""


def octave(base: int, oct: int) -> int:
    """Place pitch class ``base`` in octave ``oct`` (at most 10) as a byte value."""
    base &= 0xFF
    oct &= 0xFF
    if oct > 10:
        oct = 10
    if oct == 0:
        return base
    res = (base + 12 * oct) & 0xFF
    if res > 127:
        res -= 12
    return res


def parse_note(note: str) -> int:
    """MIDI note of an answer such as "C#6"; characters that mean nothing are skipped."""
    base = 0
    level = 0
    for c in note.replace(" ", "").encode("utf-8"):
        if _ORD_A <= c <= _ORD_G:
            base = NOTE_MAP[chr(c)] % 12
        elif c == ord("b"):
            base = (base - 1) & 0xFF
        elif c == ord("#"):
            base = (base + 1) & 0xFF
        elif _ORD_0 <= c <= _ORD_9:
            level = (level * 10 + c - _ORD_0) & 0xFF
    if level == 0:
        level = DEFAULT_LEVEL
    return octave(base, level)


def _atoi(digits: bytes) -> int:
    try:
        return int(digits.decode("ascii"))
    except ValueError:
        return 0


def _ticks(length: int) -> int:
    """Duration in ticks of a note of length exponent ``length`` (quarter is 0)."""
    if length >= 0:
        factor = 1 << length if length < 32 else 0
        return (TICKS_PER_QUARTER * factor) & 0xFFFFFFFF
    if -length >= 32:
        raise ValueError(f"note length out of range: {length}")
    return TICKS_PER_QUARTER >> -length


def _events(text: str) -> Iterator[tuple[int, int, int]]:
    """Yield (delay, note, duration) in ticks for every note of the melody."""
    k = text.replace(" ", "").encode("utf-8")
    n = len(k)
    i = 0
    delay = 0
    while i < n:
        base = 0
        level = 0
        rest = False
        length_chars = bytearray()
        while True:
            c = k[i]
            if c == ord("R"):
                rest = True
                i += 1
            elif _ORD_A <= c <= _ORD_G:
                base = NOTE_MAP[chr(c)] % 12
                i += 1
            elif c == ord("b"):
                base = (base - 1) & 0xFF
                i += 1
            elif c == ord("#"):
                base = (base + 1) & 0xFF
                i += 1
            elif _ORD_0 <= c <= _ORD_9:
                level = (level * 10 + c - _ORD_0) & 0xFF
                i += 1
            elif c == ord("<"):
                i += 1
                while i < n and (k[i] == ord("-") or _ORD_0 <= k[i] <= _ORD_9):
                    length_chars.append(k[i])
                    i += 1
            else:
                raise ValueError(f"无法解析第{i}个位置的{chr(c)}字符")
            if i >= n or _ORD_A <= k[i] <= _ORD_G or k[i] == ord("R"):
                break
        ticks = _ticks(_atoi(bytes(length_chars)))
        if rest:
            delay = ticks
            continue
        if level == 0:
            level = DEFAULT_LEVEL
        yield delay, octave(base, level), ticks
        delay = 0


def make_midi(path: str, text: str) -> None:
    """Write the melody ``text`` as a violin MIDI file; an existing file is kept."""
    if os.path.exists(path):
        return
    track = mido.MidiTrack()
    track.append(mido.MetaMessage("time_signature", numerator=4, denominator=4, time=0))
    track.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(TEMPO_BPM), time=0))
    track.append(mido.MetaMessage("instrument_name", name="Violin", time=0))
    track.append(mido.Message("program_change", channel=0, program=VIOLIN_PROGRAM, time=0))
    for delay, note, duration in _events(text):
        key = note & 0x7F
        track.append(mido.Message("note_on", channel=0, note=key, velocity=VELOCITY, time=delay))
        track.append(mido.Message("note_off", channel=0, note=key, velocity=0, time=duration))
    track.append(mido.MetaMessage("end_of_track", time=0))
    midi = mido.MidiFile(type=1, ticks_per_beat=TICKS_PER_QUARTER)
    midi.tracks.append(track)
    midi.save(path)


def _round_half_away(x: float) -> int:
    return int(math.floor(x + 0.5)) if x >= 0 else -int(math.floor(-x + 0.5))


def _power(length: float):
    """Rounded base-2 logarithm of ``length``, or None when it has none."""
    if length <= 0:
        return None
    return _round_half_away(math.log2(length))


def midi_to_text(data: bytes) -> str:
    """Describe the first track of a MIDI file in the melody notation."""
    try:
        midi = mido.MidiFile(file=io.BytesIO(data))
    except Exception:  # unreadable files give no notes
        return ""
    if not midi.tracks:
        return ""
    parts: list[str] = []
    abs_ticks = 0
    start = 0.0
    end = 0.0
    start_note = 0
    end_note = 0
    for msg in midi.tracks[0]:
        abs_ticks += msg.time
        if msg.is_meta:
            continue
        b = msg.bytes()
        if not b:
            continue
        if len(b) == 3:
            if b[0] == 0x90 and b[2] > 0:
                start = float(abs_ticks)
                start_note = b[1]
            if b[0] == 0x80 or (b[0] == 0x90 and b[2] == 0):
                end = float(abs_ticks)
                end_note = b[1]
        note_off = b[0] == 0x80 or (b[0] == 0x90 and len(b) > 2 and b[2] == 0)
        if note_off and start_note == end_note:
            parts.append(note_name(b[1]))
            level = b[1] // 12
            if level != DEFAULT_LEVEL:
                parts.append(str(level))
            power = _power((end - start) / TICKS_PER_QUARTER)
            if power is not None and power >= -4 and power != 0:
                parts.append(f"<{power}")
            start_note = 0
            end_note = 0
        note_on = b[0] == 0x90 and len(b) > 2 and b[2] > 0
        if note_on and start > end:
            power = _power((start - end) / TICKS_PER_QUARTER)
            if power == 0:
                parts.append("R")
            elif power is not None and power >= -4:
                parts.append(f"R<{power}")
    return "".join(parts)


def render_wav(midi_path: str, wav_path: str) -> None:
    """Render a MIDI file to WAV with timidity; raises if it fails."""
    subprocess.run(["timidity", midi_path, "-Ow", "-o", wav_path], check=True)


def str_to_music(text: str, midi_path: str) -> str:
    """Write the melody to ``midi_path`` and render it; returns the WAV path."""
    make_midi(midi_path, text)
    wav_path = midi_path.replace(".mid", ".wav")
    render_wav(midi_path, wav_path)
    return wav_path