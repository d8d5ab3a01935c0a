"""Child lock, pinch protection and block detection charts of the window lift."""

from __future__ import annotations

from .statemate_state import ULONG_MASK, Flag, WindowLiftState

_MEASURE_PERIOD = 0.002
_INITIAL_CURRENT_MAX = 2
_BLOCK_SAMPLES = 11


def _mirror_switches(
    state: WindowLiftState, open_now: int, open_old: int, close_now: int, close_old: int
) -> None:
    """Pass the first edge of an open or close switch on to the door module."""
    if open_now and not open_old:
        state.stable = 0
        state.tuermodul_sfha_copy = 1
    elif close_now and not close_old:
        state.stable = 0
        state.tuermodul_sfhz_copy = 1
    elif not open_now and open_old:
        state.stable = 0
        state.tuermodul_sfha_copy = 0
    elif not close_now and close_old:
        state.stable = 0
        state.tuermodul_sfhz_copy = 0


def _child_lock_waiting(s: WindowLiftState) -> None:
    kl_50 = s.tuermodul_kl_50
    close_mec, open_mec = s.tuermodul_sfhz_mec, s.tuermodul_sfha_mec
    close_central, open_central = s.tuermodul_sfhz_zentral, s.tuermodul_sfha_zentral

    if not kl_50 and close_mec and open_mec:
        s.tuermodul_sfhz_copy = 1
        s.tuermodul_sfha_copy = 1
        target = 2
    elif not kl_50 and close_mec and not open_mec:
        s.tuermodul_sfhz_copy = 1
        target = 2
    elif not kl_50 and not close_mec and open_mec:
        s.tuermodul_sfha_copy = 1
        target = 2
    elif not close_central and open_central and not kl_50:
        s.tuermodul_sfha_copy = 1
        target = 1
    elif close_central and open_central:
        s.tuermodul_sfha_copy = 1
        s.tuermodul_sfhz_copy = 1
        target = 1
    elif close_central and not open_central and not kl_50:
        s.tuermodul_sfhz_copy = 1
        target = 1
    else:
        return
    s.stable = 0
    s.kindersicherung_state = target


def child_lock_ctrl(state: WindowLiftState) -> None:
    """Advance the child lock chart, which routes central or local switches."""
    s = state
    if not s.bits[Flag.ACTIVE_KINDERSICHERUNG]:
        return

    if s.kindersicherung_state == 1:
        if not (s.tuermodul_sfha_zentral or s.tuermodul_sfhz_zentral):
            s.stable = 0
            s.tuermodul_sfhz_copy = 0
            s.tuermodul_sfha_copy = 0
            s.kindersicherung_state = 3
            s.zentral_state = 0
        elif s.zentral_state == 1:
            _mirror_switches(
                s,
                s.tuermodul_sfha_zentral,
                s.tuermodul_sfha_zentral_old,
                s.tuermodul_sfhz_zentral,
                s.tuermodul_sfhz_zentral_old,
            )
        else:
            s.stable = 0
    elif s.kindersicherung_state == 2:
        if not (s.tuermodul_sfha_mec or s.tuermodul_sfhz_mec):
            s.stable = 0
            s.tuermodul_sfhz_copy = 0
            s.tuermodul_sfha_copy = 0
            s.kindersicherung_state = 3
            s.mec_state = 0
        elif s.mec_state == 1:
            _mirror_switches(
                s,
                s.tuermodul_sfha_mec,
                s.tuermodul_sfha_mec_old,
                s.tuermodul_sfhz_mec,
                s.tuermodul_sfhz_mec_old,
            )
        else:
            s.stable = 0
    elif s.kindersicherung_state == 3:
        _child_lock_waiting(s)
    else:
        s.stable = 0
        s.kindersicherung_state = 3


def pinch_protection_ctrl(state: WindowLiftState) -> None:
    """Advance the pinch protection chart, which watches the safety edge."""
    s = state
    if not s.bits[Flag.ACTIVE_EINKLEMMSCHUTZ]:
        return

    if s.einklemmschutz_state == 1:
        if (s.tuermodul_eks_leiste_aktiv and not s.tuermodul_eks_leiste_aktiv_old) and not (
            s.tuermodul_sfhz and s.tuermodul_sfha
        ):
            s.stable = 0
            s.bits[Flag.EINKLEMMUNG] = 1
            s.einklemmschutz_state = 2
    elif s.einklemmschutz_state == 2:
        s.bits[Flag.EINKLEMMUNG] = 0
        if not s.tuermodul_eks_leiste_aktiv and s.tuermodul_eks_leiste_aktiv_old:
            s.stable = 0
            s.einklemmschutz_state = 1
    else:
        s.stable = 0
        s.einklemmschutz_state = 1


def _enter_current_measurement(s: WindowLiftState) -> None:
    s.block_n = 0
    s.block_i_ein_max = _INITIAL_CURRENT_MAX
    s.bewegung_state = 3
    s.bits[Flag.ENTERED_EINSCHALTSTROM_MESSEN] = 1


def _measure_current(s: WindowLiftState) -> None:
    s.bits[Flag.ENTERED_EINSCHALTSTROM_MESSEN] = 0
    if s.block_n == _BLOCK_SAMPLES and s.block_n_old != _BLOCK_SAMPLES:
        s.stable = 0
        s.bewegung_state = 2
        return
    stamp = s.tm_einschaltstrom_messen
    if (
        s.step == 1
        and stamp != 0
        and ((s.time - stamp) & ULONG_MASK) == _MEASURE_PERIOD
    ):
        s.block_n += 1
        if s.tuermodul_i_ein > s.block_i_ein_max:
            s.block_i_ein_max = s.tuermodul_i_ein


def block_detection_ctrl(state: WindowLiftState) -> None:
    """Advance the block detection chart, which watches the motor current."""
    s = state
    bits = s.bits
    if (
        not bits[Flag.ACTIVE_BLOCK_ERKENNUNG]
        and bits[Flag.ACTIVE_BLOCK_ERKENNUNG_OLD]
        and not bits[Flag.ACTIVE_BLOCK_ERKENNUNG_COPY]
    ):
        bits[Flag.ENTERED_EINSCHALTSTROM_MESSEN] = 0
    if not bits[Flag.ACTIVE_BLOCK_ERKENNUNG]:
        return

    if s.block_erkennung_state == 1:
        if s.tuermodul_i_ein != s.tuermodul_i_ein_old and s.tuermodul_i_ein > 0:
            s.stable = 0
            s.tuermodul_block_copy = 0
            s.block_erkennung_state = 2
            _enter_current_measurement(s)
    elif s.block_erkennung_state == 2:
        if (not s.tuermodul_mfha and s.tuermodul_mfha_old) or (
            not s.tuermodul_mfhz and s.tuermodul_mfhz_old
        ):
            s.stable = 0
            s.block_erkennung_state = 1
            s.bewegung_state = 0
        elif s.bewegung_state == 1:
            pass
        elif s.bewegung_state == 2:
            if s.tuermodul_i_ein > s.block_i_ein_max - 2:
                s.stable = 0
                s.tuermodul_block_copy = 1
                s.bewegung_state = 1
        elif s.bewegung_state == 3:
            _measure_current(s)
        else:
            s.stable = 0
            _enter_current_measurement(s)
    else:
        s.stable = 0
        s.block_erkennung_state = 1