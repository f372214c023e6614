from __future__ import annotations

import os
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from dgmod.analyze import analyze_crate
from dgmod.errors import AnalyzeError
from dgmod.mermaid import to_mermaid
from dgmod.model import AnalyzeResult
from dgmod.summarize import summarize_graph


app = FastAPI(title="dgmod Module Graph Analyzer")


class AnalyzeRequest(BaseModel):
	crate_path: str
	crate_name: Optional[str] = None
	exclude_tests: bool = False


@app.post("/analyze", response_model=AnalyzeResult)
def analyze(req: AnalyzeRequest) -> AnalyzeResult:
	root = os.path.abspath(req.crate_path)
	if not os.path.isdir(root):
		raise HTTPException(status_code=400, detail=f"Invalid crate_path: {root}")

	crate_name = req.crate_name or os.path.basename(root) or "crate"
	try:
		graph = analyze_crate(root, crate_name)
	except AnalyzeError as e:
		raise HTTPException(status_code=422, detail=str(e)) from e

	if req.exclude_tests:
		graph.exclude_tests_modules()

	return AnalyzeResult(facts=graph.to_facts(), mermaid=to_mermaid(graph), summary=summarize_graph(graph))


def create_app() -> FastAPI:
	return app
