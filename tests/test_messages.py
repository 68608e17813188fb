from village.messages import MessageCenter, Severity
from village.scheduler import Scheduler


def test_message_hides_after_duration():
    sched = Scheduler()
    center = MessageCenter(sched, duration=2.5)
    center.show("Hello", Severity.INFO)
    sched.advance(2.0)
    assert center.current.text == "Hello"
    sched.advance(0.5)
    assert center.current is None


def test_new_message_preempts_and_restarts_timer():
    sched = Scheduler()
    center = MessageCenter(sched, duration=2.5)
    center.show("first")
    sched.advance(2.0)
    center.show("second", Severity.ERROR)

    sched.advance(1.0)  # first message's timer would have expired here
    assert center.current.text == "second"
    assert center.current.severity is Severity.ERROR
    sched.advance(1.5)
    assert center.current is None
    assert [m.text for m in center.history] == ["first", "second"]


def test_message_timer_does_not_touch_other_timers():
    sched = Scheduler()
    ticks = []
    sched.call_every(1.0, lambda: ticks.append(sched.now))
    center = MessageCenter(sched, duration=0.5)
    center.show("a")
    center.show("b")
    center.dismiss()
    sched.advance(3.0)
    assert ticks == [1.0, 2.0, 3.0]
