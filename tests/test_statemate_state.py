from embench.statemate_state import BITLIST_SIZE, Flag, WindowLiftState


def test_new_state_has_clear_flags():
    state = WindowLiftState()
    assert len(state.bits) == BITLIST_SIZE
    assert not any(state.bits)


def test_flags_index_the_bit_list():
    state = WindowLiftState()
    state.bits[Flag.ENTERED_WIEDERHOLSPERRE_COPY] = 1
    assert state.bits[5] == 1
    assert sum(state.bits) == 1


def test_reset_clears_flags_timers_and_next_states():
    state = WindowLiftState()
    state.bits[Flag.EINKLEMMUNG] = 1
    state.tm_wiederholsperre = 7
    state.tm_einschaltstrom_messen = 3
    state.kindersicherung_state = 3
    state.bewegung_state = 2
    state.reset()
    assert not any(state.bits)
    assert state.tm_wiederholsperre == 0
    assert state.tm_einschaltstrom_messen == 0
    assert state.kindersicherung_state == 0
    assert state.bewegung_state == 0


def test_reset_keeps_signals_and_counters():
    state = WindowLiftState()
    state.ctrl_n = 4
    state.du_mfh = -100
    state.sc_2375_2 = 9
    state.tuermodul_mfhz = 1
    state.reset()
    assert state.ctrl_n == 4
    assert state.du_mfh == -100
    assert state.sc_2375_2 == 9
    assert state.tuermodul_mfhz == 1


def test_interface_records_wiederholsperre_entry():
    state = WindowLiftState(time=1)
    state.bits[Flag.ENTERED_WIEDERHOLSPERRE] = 1
    state.interface()
    assert state.tm_wiederholsperre == 1
    assert state.tm_wiederholsperre_or_bereit_exit == 1


def test_interface_records_bereit_exit_only():
    state = WindowLiftState(time=1)
    state.bits[Flag.EXITED_BEREIT] = 1
    state.interface()
    assert state.tm_wiederholsperre == 0
    assert state.tm_wiederholsperre_or_bereit_exit == 1


def test_interface_keeps_pending_action_before_timeout():
    state = WindowLiftState(time=1, sc_2375_2=1, tuermodul_mfha_copy=1)
    state.interface()
    assert state.sc_2375_2 == 1
    assert state.tuermodul_mfha_copy == 1


def test_interface_fires_expired_actions():
    state = WindowLiftState(
        time=2,
        sc_2375_2=1,
        sc_2352_1=1,
        sc_1781_10=1,
        tuermodul_mfha_copy=1,
        tuermodul_mfhz_copy=1,
    )
    state.interface()
    assert (state.sc_2375_2, state.sc_2352_1, state.sc_1781_10) == (0, 0, 0)
    assert state.tuermodul_mfha_copy == 0
    assert state.tuermodul_mfhz_copy == 0


def test_interface_clock_difference_wraps_around():
    state = WindowLiftState(time=1, sc_2329_1=2, tuermodul_mfhz_copy=1)
    state.interface()
    assert state.sc_2329_1 == 0
    assert state.tuermodul_mfhz_copy == 0


def test_interface_ignores_unscheduled_actions():
    state = WindowLiftState(time=5, tuermodul_mfha_copy=1)
    state.interface()
    assert state.tuermodul_mfha_copy == 1
    assert state.tm_einschaltstrom_messen == 0


def test_interface_records_change_of_block_counter():
    state = WindowLiftState(time=1, block_n=3, block_n_old=2)
    state.interface()
    assert state.tm_einschaltstrom_messen == 1


def test_interface_records_einschaltstrom_entry():
    state = WindowLiftState(time=1)
    state.bits[Flag.ENTERED_EINSCHALTSTROM_MESSEN] = 1
    state.interface()
    assert state.tm_einschaltstrom_messen == 1