from datetime import date, timedelta
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

app = FastAPI(title="Mock Aggregator Server", version="1.0.0")

# (merchant_name, name, category, amount) per sandbox access token
PERSONAS = {
    "access-sandbox-green": [
        ("Whole Foods Market", "WHOLE FOODS #123", ["Groceries"], 82.15),
        ("Patagonia", "PATAGONIA ONLINE", ["Shopping", "Clothing"], 129.00),
        (None, "PUBLIC TRANSIT PASS", ["Transportation"], 45.00),
        ("Local Coffee Roasters", "LOCAL COFFEE", ["Dining"], 6.50),
    ],
    "access-sandbox-fastfashion": [
        ("Zara", "ZARA USA", ["Shopping"], 89.99),
        ("H&M", "H&M 0456", ["Shopping"], 39.95),
        ("Uber", "UBER TRIP", ["Transportation"], 23.40),
        ("McDonald's", "MCDONALD'S F1234", ["Dining"], 11.25),
    ],
    "access-sandbox-empty": [],
}


class TransactionsGetOptions(BaseModel):
    count: int = 100
    offset: int = 0


class TransactionsGetRequest(BaseModel):
    client_id: str = ""
    secret: str = ""
    access_token: str
    start_date: date
    end_date: date
    options: TransactionsGetOptions = TransactionsGetOptions()


@app.get("/health")
def health(): return {"status": "ok"}


@app.post("/transactions/get")
def get_transactions(body: TransactionsGetRequest):
    if body.access_token not in PERSONAS:
        raise HTTPException(status_code=400, detail={"error_code": "INVALID_ACCESS_TOKEN"})

    txns = [
        {
            "transaction_id": f"{body.access_token}-{i}",
            "date": (body.start_date + timedelta(days=i)).isoformat(),
            "merchant_name": merchant_name,
            "name": name,
            "category": category,
            "amount": amount,
        }
        for i, (merchant_name, name, category, amount) in enumerate(PERSONAS[body.access_token])
    ]
    page = txns[body.options.offset:body.options.offset + body.options.count]
    return {"transactions": page, "total_transactions": len(txns)}
