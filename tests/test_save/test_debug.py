from unittest.mock import MagicMock
from roomkeeper.save.debug import SaveDebugTriggers

def test_flags_run_once_in_order():
    sync = MagicMock()
    triggers = SaveDebugTriggers(save_scene=True, load_scene=True, commit=True, reset=True)

    ran = triggers.process(sync)

    assert ran == ["reset", "save_scene", "load_scene", "commit"]
    assert [c[0] for c in sync.method_calls] == ["reset_all", "save_scene", "load_scene", "commit_save"]
    assert triggers == SaveDebugTriggers()

def test_no_flags_no_calls():
    sync = MagicMock()
    assert SaveDebugTriggers().process(sync) == []
    assert sync.method_calls == []
