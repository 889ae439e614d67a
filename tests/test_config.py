from config import Settings, invite_timezone


def test_settings_defaults_are_strings():
    s = Settings()
    assert isinstance(s.APP_BASE_URL, str) and s.APP_BASE_URL
    assert isinstance(s.GEMINI_TIMEOUT_MS, int)


def test_empty_timezone_means_process_local():
    assert invite_timezone("") is None
    assert invite_timezone("   ") is None


def test_unknown_timezone_falls_back_to_local():
    assert invite_timezone("Mars/Olympus_Mons") is None
