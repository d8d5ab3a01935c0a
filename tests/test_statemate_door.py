import copy

from embench.statemate_door import CLOSED_POSITION, OPEN_POSITION, door_module_ctrl
from embench.statemate_state import Flag, WindowLiftState


def _active(**fields):
    state = WindowLiftState()
    state.bits[Flag.ACTIVE_FH_TUERMODUL] = 1
    state.bits[Flag.ACTIVE_KINDERSICHERUNG] = 1
    state.bits[Flag.ACTIVE_BLOCK_ERKENNUNG] = 1
    state.a_tuermodul_state = 1
    state.wiederholsperre_state = 1
    state.stable = 1
    for name, value in fields.items():
        setattr(state, name, value)
    return state


def test_inactive_chart_leaves_state_unchanged():
    state = WindowLiftState()
    state.ctrl_n = 7
    before = copy.deepcopy(state)
    door_module_ctrl(state)
    assert state == before


def test_deactivation_clears_entry_flags():
    state = WindowLiftState()
    state.bits[Flag.ACTIVE_FH_TUERMODUL_OLD] = 1
    state.bits[Flag.ENTERED_WIEDERHOLSPERRE] = 1
    state.bits[Flag.EXITED_BEREIT] = 1
    door_module_ctrl(state)
    assert state.bits[Flag.ENTERED_WIEDERHOLSPERRE] == 0
    assert state.bits[Flag.EXITED_BEREIT] == 0


def test_first_activation_enters_default_states():
    state = WindowLiftState()
    state.bits[Flag.ACTIVE_FH_TUERMODUL] = 1
    state.stable = 1
    state.ctrl_n = 5
    door_module_ctrl(state)
    assert state.stable == 0
    assert state.b_tuermodul_state == 2
    assert state.a_tuermodul_state == 1
    assert state.wiederholsperre_state == 1
    assert state.ctrl_n == 0
    assert state.kindersicherung_state == 3
    assert state.block_erkennung_state == 1
    assert state.bits[Flag.ACTIVE_KINDERSICHERUNG_COPY] == 1
    assert state.bits[Flag.ACTIVE_BLOCK_ERKENNUNG_COPY] == 1
    assert state.bits[Flag.ENTERED_WIEDERHOLSPERRE_COPY] == state.bits[
        Flag.ENTERED_WIEDERHOLSPERRE
    ]


def test_uninitialised_ready_starts_opening():
    state = _active(b_tuermodul_state=2, nicht_initialisiert_state=3, tuermodul_sfha=1)
    door_module_ctrl(state)
    assert state.nicht_initialisiert_state == 2
    assert state.tuermodul_mfha_copy == 1
    assert state.stable == 0


def test_uninitialised_block_while_closing_initialises():
    state = _active(
        b_tuermodul_state=2,
        tuermodul_block=1,
        tuermodul_mfhz=1,
        tuermodul_mfhz_copy=1,
        time=9,
    )
    door_module_ctrl(state)
    assert state.b_tuermodul_state == 3
    assert state.initialisiert_state == 3
    assert state.sc_2329_1 == 9
    assert state.tuermodul_mfhz_copy == 0


def test_ready_close_switch_starts_manual_closing():
    state = _active(
        b_tuermodul_state=3,
        initialisiert_state=3,
        tuermodul_sfhz=1,
        tuermodul_position=CLOSED_POSITION + 1,
    )
    door_module_ctrl(state)
    assert state.initialisiert_state == 2
    assert state.schliessen_state == 2
    assert state.manuell_schliessen_state == 2
    assert state.tuermodul_mfhz_copy == 1
    assert state.bits[Flag.ACTIVE_EINKLEMMSCHUTZ_COPY] == 1


def test_ready_close_switch_ignored_when_closed():
    state = _active(
        b_tuermodul_state=3,
        initialisiert_state=3,
        tuermodul_sfhz=1,
        tuermodul_position=CLOSED_POSITION,
    )
    door_module_ctrl(state)
    assert state.initialisiert_state == 3
    assert state.tuermodul_mfhz_copy == 0
    assert state.stable == 1


def test_opening_stops_at_top():
    state = _active(
        b_tuermodul_state=3,
        initialisiert_state=1,
        oeffnen_state=2,
        tuermodul_mfha_copy=1,
        tuermodul_position=OPEN_POSITION,
    )
    door_module_ctrl(state)
    assert state.initialisiert_state == 3
    assert state.tuermodul_mfha_copy == 0


def test_block_while_opening_drops_initialisation():
    state = _active(
        b_tuermodul_state=3,
        initialisiert_state=1,
        tuermodul_block=1,
        tuermodul_mfha=1,
        tuermodul_mfha_copy=1,
        time=4,
    )
    door_module_ctrl(state)
    assert state.b_tuermodul_state == 2
    assert state.nicht_initialisiert_state == 3
    assert state.sc_2375_2 == 4
    assert state.tuermodul_mfha_copy == 0


def test_pinch_during_manual_closing_reverses():
    state = _active(
        b_tuermodul_state=3,
        initialisiert_state=2,
        schliessen_state=2,
        manuell_schliessen_state=2,
        tuermodul_position=100,
        tuermodul_sfhz=1,
        tuermodul_sfhz_old=1,
        tuermodul_mfhz_copy=1,
        time=6,
    )
    state.bits[Flag.EINKLEMMUNG] = 1
    state.bits[Flag.ACTIVE_EINKLEMMSCHUTZ_COPY] = 1
    door_module_ctrl(state)
    assert state.manuell_schliessen_state == 1
    assert state.ctrl_inrevers1_copy == 1
    assert state.tuermodul_mfhz_copy == 0
    assert state.tuermodul_mfha_copy == 1
    assert state.sc_1739_10 == 6
    assert state.bits[Flag.END_REVERS_COPY] == 1
    assert state.bits[Flag.ACTIVE_EINKLEMMSCHUTZ_COPY] == 0


def test_overuse_locks_out_window():
    state = _active(
        b_tuermodul_state=3,
        initialisiert_state=3,
        ctrl_n=61,
        ctrl_n_old=60,
        tuermodul_mfhz_copy=1,
        tuermodul_mfha_copy=1,
    )
    door_module_ctrl(state)
    assert state.b_tuermodul_state == 1
    assert state.tuermodul_mfhz_copy == 0
    assert state.tuermodul_mfha_copy == 0


def test_lockout_released_at_threshold():
    state = _active(b_tuermodul_state=1, ctrl_n=59, ctrl_n_old=60)
    door_module_ctrl(state)
    assert state.b_tuermodul_state == 3
    assert state.initialisiert_state == 3


def test_motor_run_increments_usage_counter():
    state = _active(
        b_tuermodul_state=1,
        ctrl_n=10,
        ctrl_n_old=10,
        step=1,
        time=5,
        tm_wiederholsperre_or_bereit_exit=4,
        tuermodul_mfhz=1,
    )
    door_module_ctrl(state)
    assert state.ctrl_n == 11
    assert state.a_tuermodul_state == 1
    assert state.stable == 0


def test_idle_period_decrements_usage_counter():
    state = _active(
        b_tuermodul_state=1,
        ctrl_n=10,
        ctrl_n_old=10,
        step=1,
        time=7,
        tm_wiederholsperre=4,
    )
    door_module_ctrl(state)
    assert state.ctrl_n == 9


def test_counter_unchanged_outside_first_step():
    state = _active(
        b_tuermodul_state=1,
        ctrl_n=10,
        ctrl_n_old=10,
        step=2,
        time=7,
        tm_wiederholsperre=4,
    )
    door_module_ctrl(state)
    assert state.ctrl_n == 10
    assert state.stable == 1