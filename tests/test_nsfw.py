from chatplugins.nsfw import Scores, auto_judge, judge


def test_judge_neutral():
    assert judge(Scores(neutral=0.9)) == "普通哦"


def test_judge_drawing_with_tags():
    assert judge(Scores(drawings=0.8, hentai=0.5)) == "二次元 hentai"


def test_judge_all_tags_in_order():
    result = judge(Scores(drawings=0.1, hentai=0.9, porn=0.9, sexy=0.9))
    assert result.split() == ["二次元", "hentai", "porn", "hso"]


def test_judge_exact_threshold_neutral_is_real():
    assert judge(Scores(neutral=0.3, porn=0.5)) == "三次元 porn"


def test_auto_judge_silent_on_neutral():
    assert auto_judge(Scores(neutral=0.5, porn=0.9)) is None


def test_auto_judge_silent_without_tags():
    assert auto_judge(Scores(drawings=0.9)) is None


def test_auto_judge_uses_drawings_only():
    assert auto_judge(Scores(sexy=0.6)) == "三次元 hso"
    assert auto_judge(Scores(drawings=0.5, sexy=0.6)) == "二次元 hso"


def test_auto_judge_agrees_with_judge_when_tagged():
    p = Scores(drawings=0.7, porn=0.8)
    assert auto_judge(p) == judge(p)