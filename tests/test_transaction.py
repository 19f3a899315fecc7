import pytest

from elnursery.core.transaction import TransactionService


def test_commit_returns_result(mongo_client):
    collection = mongo_client["elnursery"]["things"]
    transactions = TransactionService(mongo_client)

    def work(session):
        collection.insert_one({"name": "kept"}, session=session)
        return "done"

    assert transactions.with_transaction(work) == "done"
    assert collection.count_documents({}) == 1
    assert mongo_client.committed == 1


def test_abort_rolls_back_and_reraises_same_error(mongo_client):
    collection = mongo_client["elnursery"]["things"]
    collection.insert_one({"name": "before"})
    transactions = TransactionService(mongo_client)
    error = RuntimeError("boom")

    def work(session):
        collection.insert_one({"name": "lost"}, session=session)
        raise error

    with pytest.raises(RuntimeError) as exc:
        transactions.with_transaction(work)

    assert exc.value is error
    assert [d["name"] for d in collection.find()] == ["before"]
    assert mongo_client.aborted == 1
