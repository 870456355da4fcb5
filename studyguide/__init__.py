# Top-level package for the syllabus study-guide generator.

# This project implements:
# - Syllabus text -> five staged LLM calls -> one merged study guide
# - Primary/fallback model invocation
# - Repair of truncated or fenced JSON responses
# - Input validation, rate limiting and PDF text extraction around the pipeline

# Subpackages:
#     models/      -> LLM client (inference service + fallback invoker)
#     generation/  -> Prompts, stage definitions, result types, pipeline
#     utils/       -> JSON decoding, validation, rate limiting, PDF parsing, IO helpers
#     api/         -> Framework-free request handlers
#     experiments/ -> Runner scripts
