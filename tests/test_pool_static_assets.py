import re


def _pool_script(client):
    response = client.get("/static/js/pool.js")
    assert response.status_code == 200
    return response.get_data(as_text=True)


def test_recompute_renders_only_latest_response(client):
    script = _pool_script(client)
    recompute = script[script.index("function recompute()"):script.index("function clearErrors()")]

    assert "var seq = ++derivedSeq;" in recompute
    assert re.search(r"if \(seq === derivedSeq && result\.body", recompute)
    assert ".catch(" in recompute


def test_advice_response_does_not_overwrite_newer_derived_values(client):
    script = _pool_script(client)
    submit = script[script.index('form.addEventListener("submit"'):]

    assert "var seq = ++derivedSeq;" in submit
    guarded = submit.index("if (seq === derivedSeq)")
    assert guarded < submit.index("renderDerived(result.body.data.derived)")


def test_pool_page_loads_script_and_stylesheet(client):
    html = client.get("/").get_data(as_text=True)
    assert "/static/js/pool.js" in html
    assert "/static/css/pool.css" in html
