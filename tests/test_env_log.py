import logging

import pytest

from ustr import Alloc, Env, Err, Log, LogLevel, Result, TextErr, ErrKind, UStr


def write_props(tmp_path, text):
    etc = tmp_path / "etc" / "ustr"
    etc.mkdir(parents=True)
    (etc / "config.props").write_text(text, encoding="utf-8")


#################################################################
# Env
#################################################################

def test_config_default(tmp_path):
    env = Env(workDir=tmp_path, environ={})
    assert env.config("logLevel", "info") == "info"
    assert env.config("missing") is None


def test_config_props_then_environ(tmp_path):
    write_props(tmp_path, "// comment\n# another\nlogLevel = warn\nallocLimit=1024\n")
    env = Env(workDir=tmp_path, environ={})
    assert env.config("logLevel") == "warn"
    assert env.configInt("allocLimit") == 1024

    env = Env(workDir=tmp_path, environ={"USTR_LOGLEVEL": "debug"})
    assert env.config("logLevel") == "debug"


def test_config_typed(tmp_path):
    env = Env(workDir=tmp_path, environ={
        "USTR_ALLOCLIMIT": "nope",
        "USTR_STRICTENCODE": "Yes",
    })
    with pytest.raises(Err):
        env.configInt("allocLimit")
    assert env.configInt("other", 7) == 7
    assert env.configBool("strictEncode") is True
    assert env.configBool("other") is False


def test_alloc_limit_from_props(tmp_path):
    write_props(tmp_path, "allocLimit=16\n")
    Env.reset(Env(workDir=tmp_path, environ={}))
    Alloc.resetDefVal()
    s = UStr.make()
    assert s.alloc().limit() == 16
    s.append("abcdefgh")
    with pytest.raises(TextErr) as e:
        s.append("i")
    assert e.value.kind() is ErrKind.outOfMemory()


#################################################################
# Log
#################################################################

def test_log_level_from_str():
    assert LogLevel.fromStr("DEBUG") is LogLevel.debug()
    assert LogLevel.fromStr("bogus", checked=False) is None
    with pytest.raises(Err):
        LogLevel.fromStr("bogus")
    assert LogLevel.debug() < LogLevel.err()


def test_log_registry():
    log = Log.get("ustr")
    assert Log.get("ustr") is log
    assert Log.find("ustr") is log
    assert Log.find("nope", checked=False) is None
    with pytest.raises(Err):
        Log.make("ustr")
    with pytest.raises(Err):
        Log.make("bad name!")


def test_level_from_config(tmp_path):
    assert Log.get("ustr").level() is LogLevel.info()
    Log.clear()
    Env.reset(Env(workDir=tmp_path, environ={"USTR_LOGLEVEL": "debug"}))
    assert Log.get("ustr").isDebug()


def test_handler_receives_detection(tmp_path):
    Env.reset(Env(workDir=tmp_path, environ={"USTR_LOGLEVEL": "debug"}))
    recs = []
    Log.addHandler(recs.append)
    UStr.fromBytes(b"\xC3\xA9t\xC3\xA9")
    msgs = [r.msg() for r in recs]
    assert "Detected UTF-8 for 5 bytes" in msgs
    assert all(r.level() is LogLevel.debug() for r in recs)
    assert all(r.logName() == "ustr" for r in recs)


def test_info_level_is_quiet():
    recs = []
    Log.addHandler(recs.append)
    UStr.fromBytes(b"hello")
    assert recs == []


def test_growth_forwarded_to_logging(tmp_path, caplog):
    Env.reset(Env(workDir=tmp_path, environ={"USTR_LOGLEVEL": "debug"}))
    caplog.set_level(logging.DEBUG, logger="ustr")
    s = UStr.make()
    for u in range(9):
        s.pushBack(0x61 + u)
    assert "Grew UStr capacity 0 -> 8" in caplog.text
    assert "Grew UStr capacity 8 -> 16" in caplog.text


def test_failing_handler_is_reported(tmp_path, caplog):
    Env.reset(Env(workDir=tmp_path, environ={"USTR_LOGLEVEL": "debug"}))

    def broken(rec):
        raise ValueError("boom")

    Log.addHandler(broken)
    with caplog.at_level(logging.DEBUG, logger="ustr"):
        Log.get("ustr").info("hello")
    assert "Log handler failed" in caplog.text
    assert "hello" in caplog.text


def test_list_logs():
    assert Log.list_() == []
    log = Log.get("ustr")
    assert Log.list_() == [log]


def test_remove_handler(tmp_path):
    Env.reset(Env(workDir=tmp_path, environ={"USTR_LOGLEVEL": "debug"}))
    recs = []
    Log.addHandler(recs.append)
    assert Log.handlers() == [recs.append]
    Log.removeHandler(recs.append)
    Log.removeHandler(recs.append)
    assert Log.handlers() == []
    UStr.fromBytes(b"hello")
    assert recs == []


def test_add_handler_requires_callable():
    with pytest.raises(Err):
        Log.addHandler("nope")


#################################################################
# Result
#################################################################

def test_result_ok_and_err():
    r = Result.ok(5)
    assert r.isOk() and not r.isErr()
    assert r.get() == 5
    assert r.getOr(0) == 5
    assert r.error() is None
    assert r.toStr() == "Result.ok(5)"

    e = TextErr.make(ErrKind.outOfRange(), "too far")
    r = Result.err(e)
    assert r.isErr()
    assert r.error() is e
    assert r.getOr(0) == 0
    assert r.toStr() == "Result.err(outOfRange: too far)"
    with pytest.raises(TextErr):
        r.get()


def test_result_of_only_captures_text_errs():
    assert Result.of(int, "3").get() == 3
    with pytest.raises(ValueError):
        Result.of(int, "x")


def test_err_kinds():
    names = [k.name() for k in ErrKind.vals()]
    assert names == ["malformedSequence", "invalidSurrogate", "invalidCodepoint",
                     "outOfRange", "outOfMemory", "unsupported"]
    assert ErrKind.fromStr("outOfMemory") is ErrKind.outOfMemory()
    assert ErrKind.fromStr("nope", checked=False) is None
    e = TextErr.make(ErrKind.malformedSequence(), "bad lead", ValueError("x"))
    assert e.msg() == "bad lead"
    assert isinstance(e.cause(), ValueError)
    assert str(e) == "malformedSequence: bad lead"
    assert "Caused by" in e.traceToStr()
