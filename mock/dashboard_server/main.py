from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pathlib import Path
import json
import os

app = FastAPI(title="Mock Dashboard Data Source", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/dashboard_stub") if os.path.exists("/dashboard_stub") else Path(__file__).resolve().parents[2] / "dashboard_stub"
GRANULARITIES = {"weekly", "monthly", "quarterly", "yearly"}


def _load(name: str):
    file = DATA_DIR / name
    if not file.exists():
        raise HTTPException(status_code=404, detail="fixture not found")
    return JSONResponse(content=json.loads(file.read_text()))


@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/ledger/entries")
def get_ledger_entries():
    return _load("ledger_entries.json")

@app.get("/cash-flow")
def get_cash_flow(granularity: str = "monthly"):
    if granularity not in GRANULARITIES:
        raise HTTPException(status_code=400, detail="unknown granularity")
    return _load(f"cash_flow_{granularity}.json")

@app.get("/accounts")
def get_accounts():
    return _load("accounts.json")

@app.post("/mock-settlement")
def receive_settlement_event(payload: dict):
    return {"received": payload.get("transfer_id")}
