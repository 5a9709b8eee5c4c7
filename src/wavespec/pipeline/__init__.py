"""Pipeline orchestration layer.

Pipelines load inputs, call the DSP packages and write .npy outputs under
`data/derived/`, returning a result dict the CLI knows how to format:
- `pipeline/spectrogram.py` - audio files -> dB spectrograms
- `pipeline/melbank.py` - mel filter bank export

Import policy:
- CLI imports `pipeline.*` for orchestration and `analysis.params` for settings.
- `pipeline.*` may call `analysis.*` and the DSP packages.
- DSP packages must not call `pipeline.*`.
"""
