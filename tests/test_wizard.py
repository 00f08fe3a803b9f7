import pytest

from starterkit.wizard import DEFAULT_STEPS, Wizard, WizardError, WizardValidationError


def require_name(data):
    if not data.get("name"):
        return "name is required"
    return None


class TestWizardNavigation:
    def test_defaults(self):
        wizard = Wizard()
        assert wizard.current_step == 1
        assert wizard.total_steps == 4
        assert wizard.title == "Basic Information"
        assert wizard.progress == [True, False, False, False]
        assert not wizard.can_go_back
        assert not wizard.is_last_step

    def test_next_and_previous_are_bounded(self):
        wizard = Wizard()
        assert wizard.previous() == 1
        for expected in (2, 3, 4):
            assert wizard.next() == expected
        assert wizard.is_last_step
        assert wizard.title == DEFAULT_STEPS[-1]
        assert wizard.next() == 4
        assert wizard.progress == [True, True, True, True]
        assert wizard.previous() == 3

    def test_validator_blocks_next(self):
        wizard = Wizard(validators={1: require_name})
        with pytest.raises(WizardValidationError) as excinfo:
            wizard.next()
        assert excinfo.value.step == 1
        assert excinfo.value.message == "name is required"
        assert wizard.current_step == 1

        wizard.update(name="Ada")
        assert wizard.next() == 2

    def test_empty_steps_rejected(self):
        with pytest.raises(ValueError):
            Wizard(steps=[])


class TestWizardSubmit:
    def test_submit_only_from_last_step(self):
        wizard = Wizard()
        with pytest.raises(WizardError):
            wizard.submit(lambda data: None)
        assert not wizard.submitted

    def test_submit_passes_form_data(self):
        received = []
        wizard = Wizard(steps=["One", "Two"])
        wizard.update(name="Ada")
        wizard.next()
        wizard.update(plan="pro")
        result = wizard.submit(lambda data: received.append(data) or "ok")
        assert result == "ok"
        assert received == [{"name": "Ada", "plan": "pro"}]
        assert wizard.submitted

    def test_failed_submit_can_be_retried(self):
        wizard = Wizard(steps=["Only"])

        def failing(data):
            raise RuntimeError("server down")

        with pytest.raises(RuntimeError):
            wizard.submit(failing)
        assert not wizard.submitted
        wizard.submit(lambda data: None)
        assert wizard.submitted

    def test_reset(self):
        wizard = Wizard(steps=["A", "B"])
        wizard.update(x=1)
        wizard.next()
        wizard.reset()
        assert wizard.current_step == 1
        assert wizard.form_data == {}
