import attribute_analysis as aa


class DummyClient:
    def __init__(self, search_response):
        self.search_response = search_response

    def search(self, index, body):
        self.last_index = index
        self.last_request = body
        return self.search_response


def test_attribute_coverage_by_category(monkeypatch):
    response = {
        "aggregations": {
            "per_category": {
                "buckets": [
                    {
                        "key": "Canapé",
                        "total_products": {"value": 10},
                        "with_attr": {"count": {"value": 7}},
                    }
                ]
            }
        }
    }
    dummy = DummyClient(response)
    monkeypatch.setattr(aa, "_client", lambda: dummy)

    result = aa.attribute_coverage_by_category("decora", "attr_materials")

    assert result[0]["category"] == "Canapé"
    assert result[0]["coverage_ratio"] == 0.7
    assert dummy.last_request["query"]["bool"]["filter"] == [{"term": {"retailer_id": "decora"}}]


def test_missing_attribute_fix_list(monkeypatch):
    response = {
        "hits": {
            "hits": [
                {"_source": {"product_id": "p1", "title": "Canapé 1", "price": 900}},
                {"_source": {"product_id": "p2", "title": "Canapé 2", "price": 500}},
            ]
        }
    }
    dummy = DummyClient(response)
    monkeypatch.setattr(aa, "_client", lambda: dummy)

    missing = aa.missing_attribute_fix_list("decora", "attr_colors", "Canapé", size=2)

    assert [doc["product_id"] for doc in missing] == ["p1", "p2"]
    assert dummy.last_request["size"] == 2
    assert {"term": {"category": "Canapé"}} in dummy.last_request["query"]["bool"]["filter"]


def test_seo_score_summary(monkeypatch):
    response = {
        "hits": {"total": {"value": 4}},
        "aggregations": {
            "avg_score": {"value": 63.4},
            "good": {"doc_count": 2},
            "needs_work": {"doc_count": 1},
        },
    }
    dummy = DummyClient(response)
    monkeypatch.setattr(aa, "_client", lambda: dummy)

    summary = aa.seo_score_summary("decora")

    assert summary == {
        "total_products": 4,
        "avg_score": 63,
        "good_seo": 2,
        "needs_work": 1,
        "optimization_rate": 50,
    }
    assert dummy.last_request["aggs"]["good"]["filter"]["range"]["seo_score"] == {"gte": 70}


def test_seo_score_summary_empty_catalog(monkeypatch):
    response = {
        "hits": {"total": {"value": 0}},
        "aggregations": {
            "avg_score": {"value": None},
            "good": {"doc_count": 0},
            "needs_work": {"doc_count": 0},
        },
    }
    monkeypatch.setattr(aa, "_client", lambda: DummyClient(response))

    summary = aa.seo_score_summary("empty")

    assert summary["avg_score"] == 0
    assert summary["optimization_rate"] == 0
