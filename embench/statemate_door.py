"""Door module chart of the window lift: motor commands, reversing and lockout."""

from __future__ import annotations

from .statemate_state import ULONG_MASK, Flag, WindowLiftState

OPEN_POSITION = 405
"""Window position at which opening stops."""

CLOSED_POSITION = 0
"""Window position at which closing stops."""

_LOCKOUT_LIMIT = 60
_LOCKOUT_RELEASE = 59
_LOCKOUT_COUNT_DELAY = 1
_LOCKOUT_RELEASE_DELAY = 3


def _rising(now: int, old: int) -> bool:
    return bool(now) and not old


def _falling(now: int, old: int) -> bool:
    return not now and bool(old)


def _elapsed(state: WindowLiftState, stamp: int) -> int:
    return (state.time - stamp) & ULONG_MASK


def _block_edge(s: WindowLiftState) -> bool:
    return _rising(s.tuermodul_block, s.tuermodul_block_old)


def _not_initialised(s: WindowLiftState) -> None:
    """Uninitialised state: the window only moves while a switch is held."""
    if _block_edge(s) and s.tuermodul_mfhz:
        s.stable = 0
        s.tuermodul_mfhz_copy = 0
        s.sc_2329_1 = s.time
        s.b_tuermodul_state = 3
        s.initialisiert_state = 3
        return

    sub = s.nicht_initialisiert_state
    if sub == 1:
        if not s.tuermodul_sfhz:
            s.stable = 0
            s.tuermodul_mfhz_copy = 0
            s.nicht_initialisiert_state = 3
    elif sub == 2:
        if not s.tuermodul_sfha:
            s.stable = 0
            s.tuermodul_mfha_copy = 0
            s.nicht_initialisiert_state = 3
    elif sub == 3:
        if s.tuermodul_sfha:
            s.stable = 0
            s.tuermodul_mfha_copy = 1
            s.nicht_initialisiert_state = 2
        elif s.tuermodul_sfhz:
            s.stable = 0
            s.tuermodul_mfhz_copy = 1
            s.nicht_initialisiert_state = 1
    else:
        s.stable = 0
        s.nicht_initialisiert_state = 3


def _opening(s: WindowLiftState) -> None:
    if s.tuermodul_position >= OPEN_POSITION:
        s.stable = 0
        s.tuermodul_mfha_copy = 0
        s.initialisiert_state = 3
        return

    sfhz_edge = _rising(s.tuermodul_sfhz, s.tuermodul_sfhz_old)
    sub = s.oeffnen_state
    if sub == 1:
        if sfhz_edge or _rising(s.tuermodul_sfha, s.tuermodul_sfha_old):
            s.stable = 0
            s.tuermodul_mfha_copy = 0
            s.initialisiert_state = 3
            s.oeffnen_state = 0
    elif sub == 2:
        if sfhz_edge:
            s.stable = 0
            s.oeffnen_state = 1
        elif _falling(s.tuermodul_sfha, s.tuermodul_sfha_old):
            s.stable = 0
            s.tuermodul_mfha_copy = 0
            s.initialisiert_state = 3
            s.oeffnen_state = 0
    else:
        s.stable = 0
        s.oeffnen_state = 2


def _tip_closing(s: WindowLiftState) -> None:
    bits = s.bits
    if _rising(s.tuermodul_sfha, s.tuermodul_sfha_old) or _rising(
        s.tuermodul_sfhz, s.tuermodul_sfhz_old
    ):
        s.stable = 0
        s.tuermodul_mfhz_copy = 0
        s.initialisiert_state = 3
        return

    sub = s.tipp_schliessen_state
    if sub == 1:
        bits[Flag.END_REVERS_COPY] = 0
        if bits[Flag.END_REVERS]:
            s.stable = 0
            s.tuermodul_mfhz_copy = 1
            s.ctrl_inrevers2_copy = 0
            s.tipp_schliessen_state = 2
            s.tuermodul_mfha_copy = 0
            bits[Flag.ACTIVE_EINKLEMMSCHUTZ_COPY] = 1
    elif sub == 2:
        if bits[Flag.EINKLEMMUNG]:
            s.stable = 0
            s.ctrl_inrevers2_copy = 1
            bits[Flag.END_REVERS_COPY] = 1
            s.tipp_schliessen_state = 1
            bits[Flag.ACTIVE_EINKLEMMSCHUTZ_COPY] = 0
            s.tuermodul_mfhz_copy = 0
            s.sc_1781_10 = s.time
            s.tuermodul_mfha_copy = 1
    else:
        s.stable = 0
        s.tipp_schliessen_state = 2
        bits[Flag.ACTIVE_EINKLEMMSCHUTZ_COPY] = 1


def _manual_closing(s: WindowLiftState) -> None:
    bits = s.bits
    if _falling(s.tuermodul_sfhz, s.tuermodul_sfhz_old):
        s.stable = 0
        s.tuermodul_mfhz_copy = 0
        s.initialisiert_state = 3
        return

    sub = s.manuell_schliessen_state
    if sub == 1:
        bits[Flag.END_REVERS_COPY] = 0
        if bits[Flag.END_REVERS]:
            s.stable = 0
            s.ctrl_inrevers1_copy = 0
            s.manuell_schliessen_state = 2
            s.tuermodul_mfha_copy = 0
            bits[Flag.ACTIVE_EINKLEMMSCHUTZ_COPY] = 1
            s.tuermodul_mfhz_copy = 1
    elif sub == 2:
        if bits[Flag.EINKLEMMUNG]:
            s.stable = 0
            s.tuermodul_mfhz_copy = 0
            s.ctrl_inrevers1_copy = 1
            bits[Flag.END_REVERS_COPY] = 1
            s.manuell_schliessen_state = 1
            bits[Flag.ACTIVE_EINKLEMMSCHUTZ_COPY] = 0
            s.sc_1739_10 = s.time
            s.tuermodul_mfha_copy = 1
        elif _rising(s.tuermodul_sfha, s.tuermodul_sfha_old):
            s.stable = 0
            s.schliessen_state = 1
            s.manuell_schliessen_state = 0
    else:
        s.stable = 0
        s.manuell_schliessen_state = 2
        bits[Flag.ACTIVE_EINKLEMMSCHUTZ_COPY] = 1
        s.tuermodul_mfhz_copy = 1


def _start_manual_closing(s: WindowLiftState) -> None:
    s.manuell_schliessen_state = 2
    s.bits[Flag.ACTIVE_EINKLEMMSCHUTZ_COPY] = 1
    s.tuermodul_mfhz_copy = 1


def _closing(s: WindowLiftState) -> None:
    if s.tuermodul_position <= CLOSED_POSITION:
        s.stable = 0
        s.tuermodul_mfhz_copy = 0
        s.initialisiert_state = 3
        return

    sub = s.schliessen_state
    if sub == 1:
        _tip_closing(s)
    elif sub == 2:
        _manual_closing(s)
    else:
        s.stable = 0
        s.schliessen_state = 2
        _start_manual_closing(s)


def _ready(s: WindowLiftState) -> None:
    if _rising(s.tuermodul_sfhz, s.tuermodul_sfhz_old) and s.tuermodul_position > CLOSED_POSITION:
        s.stable = 0
        s.initialisiert_state = 2
        s.schliessen_state = 2
        _start_manual_closing(s)
    elif _rising(s.tuermodul_sfha, s.tuermodul_sfha_old) and s.tuermodul_position < OPEN_POSITION:
        s.stable = 0
        s.tuermodul_mfha_copy = 1
        s.initialisiert_state = 1
        s.oeffnen_state = 2


def _initialised(s: WindowLiftState) -> None:
    """Initialised state: normal opening, closing and the lockout on overuse."""
    if (
        s.ctrl_n > _LOCKOUT_LIMIT
        and not s.ctrl_n_old > _LOCKOUT_LIMIT
        and not (s.ctrl_inrevers1 or s.ctrl_inrevers2)
    ):
        s.stable = 0
        s.tuermodul_mfhz_copy = 0
        s.tuermodul_mfha_copy = 0
        s.b_tuermodul_state = 1
        return
    if _block_edge(s) and s.tuermodul_mfha:
        s.stable = 0
        s.tuermodul_mfha_copy = 0
        s.sc_2375_2 = s.time
        s.b_tuermodul_state = 2
        s.nicht_initialisiert_state = 3
        return
    if _block_edge(s) and s.tuermodul_mfhz:
        s.stable = 0
        s.tuermodul_mfhz_copy = 0
        s.sc_2352_1 = s.time
        s.b_tuermodul_state = 2
        s.nicht_initialisiert_state = 3
        return

    sub = s.initialisiert_state
    if sub == 1:
        _opening(s)
    elif sub == 2:
        _closing(s)
    elif sub == 3:
        _ready(s)
    else:
        s.stable = 0
        s.initialisiert_state = 3


def _operation_region(s: WindowLiftState) -> None:
    sub = s.b_tuermodul_state
    if sub == 1:
        if s.ctrl_n == _LOCKOUT_RELEASE and s.ctrl_n_old != _LOCKOUT_RELEASE:
            s.stable = 0
            s.b_tuermodul_state = 3
            s.initialisiert_state = 3
    elif sub == 2:
        _not_initialised(s)
    elif sub == 3:
        _initialised(s)
    else:
        s.stable = 0
        s.b_tuermodul_state = 2


def _enter_lockout_counter(s: WindowLiftState) -> None:
    s.bits[Flag.ENTERED_WIEDERHOLSPERRE_COPY] = 1
    s.wiederholsperre_state = 1


def _lockout_region(s: WindowLiftState) -> None:
    """Count motor runs to lock out the window when it is used too often."""
    if s.a_tuermodul_state != 1:
        s.stable = 0
        s.ctrl_n = 0
        s.a_tuermodul_state = 1
        _enter_lockout_counter(s)
        return

    s.bits[Flag.ENTERED_WIEDERHOLSPERRE_COPY] = 0
    moving = s.tuermodul_mfhz or s.tuermodul_mfha
    stamp = s.tm_wiederholsperre_or_bereit_exit
    if (
        s.step == 1
        and stamp != 0
        and _elapsed(s, stamp) == _LOCKOUT_COUNT_DELAY
        and moving
    ):
        s.stable = 0
        s.ctrl_n += 1
        s.a_tuermodul_state = 1
        _enter_lockout_counter(s)
        return

    if s.wiederholsperre_state == 1:
        stamp = s.tm_wiederholsperre
        if (
            s.step == 1
            and stamp != 0
            and _elapsed(s, stamp) == _LOCKOUT_RELEASE_DELAY
            and not moving
            and s.ctrl_n > 0
        ):
            s.stable = 0
            s.ctrl_n -= 1
            s.wiederholsperre_state = 1
    else:
        s.stable = 0
        _enter_lockout_counter(s)


def door_module_ctrl(state: WindowLiftState) -> None:
    """Advance the door module chart and the sub-charts it activates."""
    s = state
    bits = s.bits
    if (
        not bits[Flag.ACTIVE_FH_TUERMODUL]
        and bits[Flag.ACTIVE_FH_TUERMODUL_OLD]
        and not bits[Flag.ACTIVE_FH_TUERMODUL_COPY]
    ):
        bits[Flag.ENTERED_WIEDERHOLSPERRE] = 0
        bits[Flag.EXITED_BEREIT] = 0
    if not bits[Flag.ACTIVE_FH_TUERMODUL]:
        return

    if not bits[Flag.ACTIVE_KINDERSICHERUNG]:
        s.kindersicherung_state = 3
    bits[Flag.ACTIVE_KINDERSICHERUNG_COPY] = 0
    if not bits[Flag.ACTIVE_BLOCK_ERKENNUNG]:
        bits[Flag.ENTERED_EINSCHALTSTROM_MESSEN] = 0
        s.block_erkennung_state = 1
    bits[Flag.ACTIVE_BLOCK_ERKENNUNG_COPY] = 0
    bits[Flag.ACTIVE_KINDERSICHERUNG_COPY] = 1
    bits[Flag.ACTIVE_BLOCK_ERKENNUNG_COPY] = 1

    _operation_region(s)
    _lockout_region(s)

    bits[Flag.ENTERED_WIEDERHOLSPERRE_COPY] = bits[Flag.ENTERED_WIEDERHOLSPERRE]
    bits[Flag.EXITED_BEREIT_COPY] = bits[Flag.EXITED_BEREIT]