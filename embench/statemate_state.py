"""Variables and event flags of the car window lift statechart."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

BITLIST_SIZE = 64
"""Number of event and activity flags held in :attr:`WindowLiftState.bits`."""

ULONG_MASK = (1 << 64) - 1
"""Wrap-around mask for differences of the unsigned clock values."""

TIMEOUT = 0.5
"""Time after which a scheduled action of the door module fires."""


class Flag(IntEnum):
    """Positions of the event and activity flags in the flag list."""

    ENTERED_EINSCHALTSTROM_MESSEN = 0
    ENTERED_EINSCHALTSTROM_MESSEN_COPY = 1
    ENTERED_WIEDERHOLSPERRE = 4
    ENTERED_WIEDERHOLSPERRE_COPY = 5
    EXITED_BEREIT = 6
    EXITED_BEREIT_COPY = 7
    ACTIVE_KINDERSICHERUNG = 10
    ACTIVE_KINDERSICHERUNG_COPY = 11
    ACTIVE_KINDERSICHERUNG_OLD = 12
    ACTIVE_FH_TUERMODUL = 13
    ACTIVE_FH_TUERMODUL_COPY = 14
    ACTIVE_FH_TUERMODUL_OLD = 15
    ACTIVE_EINKLEMMSCHUTZ = 16
    ACTIVE_EINKLEMMSCHUTZ_COPY = 17
    ACTIVE_EINKLEMMSCHUTZ_OLD = 18
    ACTIVE_BLOCK_ERKENNUNG = 19
    ACTIVE_BLOCK_ERKENNUNG_COPY = 20
    ACTIVE_BLOCK_ERKENNUNG_OLD = 21
    END_REVERS = 22
    END_REVERS_COPY = 23
    EINKLEMMUNG = 24


_TIMERS = (
    "tm_einschaltstrom_messen",
    "tm_wiederholsperre_or_bereit_exit",
    "tm_wiederholsperre",
)

_NEXT_STATES = (
    "nicht_initialisiert_state",
    "zentral_state",
    "mec_state",
    "kindersicherung_state",
    "b_tuermodul_state",
    "a_tuermodul_state",
    "wiederholsperre_state",
    "initialisiert_state",
    "tipp_schliessen_state",
    "manuell_schliessen_state",
    "oeffnen_state",
    "schliessen_state",
    "steuerung_dummy_state",
    "einklemmschutz_state",
    "bewegung_state",
    "block_erkennung_state",
)


@dataclass
class WindowLiftState:
    """Every variable of the window lift controller and its door unit.

    ``tuermodul_*`` are the signals of the door module, ``du_*`` those of the
    door unit, ``ctrl_*`` and ``block_*`` the data of the door module and the
    block detection charts. The ``*_state`` fields hold the next state of each
    chart, 0 meaning the chart has not been entered yet.
    """

    bits: bytearray = field(default_factory=lambda: bytearray(BITLIST_SIZE))

    time: int = 0
    stable: int = 0
    step: int = 0

    tm_einschaltstrom_messen: int = 0
    tm_wiederholsperre_or_bereit_exit: int = 0
    tm_wiederholsperre: int = 0
    sc_2375_2: int = 0
    sc_2352_1: int = 0
    sc_2329_1: int = 0
    sc_1781_10: int = 0
    sc_1739_10: int = 0

    ctrl_n: int = 0
    ctrl_n_copy: int = 0
    ctrl_n_old: int = 0
    ctrl_inrevers2: int = 0
    ctrl_inrevers2_copy: int = 0
    ctrl_inrevers1: int = 0
    ctrl_inrevers1_copy: int = 0
    ctrl_ft: int = 0

    block_i_ein_max: int = 0
    block_i_ein_max_copy: int = 0
    block_n: int = 0
    block_n_copy: int = 0
    block_n_old: int = 0

    tuermodul_position: int = 0
    tuermodul_i_ein: int = 0
    tuermodul_i_ein_old: int = 0
    tuermodul_sfhz_zentral: int = 0
    tuermodul_sfhz_zentral_old: int = 0
    tuermodul_sfhz_mec: int = 0
    tuermodul_sfhz_mec_old: int = 0
    tuermodul_sfha_zentral: int = 0
    tuermodul_sfha_zentral_old: int = 0
    tuermodul_sfha_mec: int = 0
    tuermodul_sfha_mec_old: int = 0
    tuermodul_kl_50: int = 0
    tuermodul_block: int = 0
    tuermodul_block_copy: int = 0
    tuermodul_block_old: int = 0
    tuermodul_ft: int = 0
    tuermodul_sfhz: int = 0
    tuermodul_sfhz_copy: int = 0
    tuermodul_sfhz_old: int = 0
    tuermodul_sfha: int = 0
    tuermodul_sfha_copy: int = 0
    tuermodul_sfha_old: int = 0
    tuermodul_mfhz: int = 0
    tuermodul_mfhz_copy: int = 0
    tuermodul_mfhz_old: int = 0
    tuermodul_mfha: int = 0
    tuermodul_mfha_copy: int = 0
    tuermodul_mfha_old: int = 0
    tuermodul_eks_leiste_aktiv: int = 0
    tuermodul_eks_leiste_aktiv_old: int = 0
    tuermodul_com_open: int = 0
    tuermodul_com_close: int = 0

    du_mfh: int = 0
    du_mfh_copy: int = 0
    du_position: int = 0
    du_i_ein: int = 0
    du_i_ein_old: int = 0
    du_kl_50: int = 0
    du_s_fh_ftzu: int = 0
    du_s_fh_ftauf: int = 0
    du_ft: int = 0
    du_eks_leiste_aktiv: int = 0
    du_eks_leiste_aktiv_old: int = 0
    du_s_fh_tmbfaufcan: int = 0
    du_s_fh_tmbfaufcan_copy: int = 0
    du_s_fh_tmbfaufcan_old: int = 0
    du_s_fh_tmbfzucan: int = 0
    du_s_fh_tmbfzucan_copy: int = 0
    du_s_fh_tmbfzucan_old: int = 0
    du_s_fh_tmbfzudisc: int = 0
    du_s_fh_tmbfzudisc_old: int = 0
    du_s_fh_tmbfaufdisc: int = 0
    du_s_fh_tmbfaufdisc_old: int = 0
    du_s_fh_zudisc: int = 0
    du_s_fh_aufdisc: int = 0
    du_door_id: int = 0
    du_block: int = 0
    du_block_copy: int = 0
    du_block_old: int = 0
    du_mfhz: int = 0
    du_mfhz_copy: int = 0
    du_mfhz_old: int = 0
    du_mfha: int = 0
    du_mfha_copy: int = 0
    du_mfha_old: int = 0

    nicht_initialisiert_state: int = 0
    zentral_state: int = 0
    mec_state: int = 0
    kindersicherung_state: int = 0
    b_tuermodul_state: int = 0
    a_tuermodul_state: int = 0
    wiederholsperre_state: int = 0
    initialisiert_state: int = 0
    tipp_schliessen_state: int = 0
    manuell_schliessen_state: int = 0
    oeffnen_state: int = 0
    schliessen_state: int = 0
    steuerung_dummy_state: int = 0
    einklemmschutz_state: int = 0
    bewegung_state: int = 0
    block_erkennung_state: int = 0

    def reset(self) -> None:
        """Clear every flag, the entry timers and all charts' next states.

        Signal values and counters are left as they are.
        """
        self.bits[:] = bytes(BITLIST_SIZE)
        for name in _TIMERS + _NEXT_STATES:
            setattr(self, name, 0)

    def _timed_out(self, stamp: int) -> bool:
        return stamp != 0 and ((self.time - stamp) & ULONG_MASK) >= TIMEOUT

    def interface(self) -> None:
        """Record entry times of timed states and fire expired scheduled actions."""
        bits = self.bits
        if bits[Flag.ENTERED_WIEDERHOLSPERRE]:
            self.tm_wiederholsperre = self.time
        if bits[Flag.ENTERED_WIEDERHOLSPERRE] or bits[Flag.EXITED_BEREIT]:
            self.tm_wiederholsperre_or_bereit_exit = self.time
        if self._timed_out(self.sc_2375_2):
            self.tuermodul_mfha_copy = 0
            self.sc_2375_2 = 0
        if self._timed_out(self.sc_2352_1):
            self.tuermodul_mfhz_copy = 0
            self.sc_2352_1 = 0
        if self._timed_out(self.sc_2329_1):
            self.tuermodul_mfhz_copy = 0
            self.sc_2329_1 = 0
        if self._timed_out(self.sc_1781_10):
            self.sc_1781_10 = 0
        if self._timed_out(self.sc_1739_10):
            self.sc_1739_10 = 0
        if bits[Flag.ENTERED_EINSCHALTSTROM_MESSEN] or self.block_n != self.block_n_old:
            self.tm_einschaltstrom_messen = self.time