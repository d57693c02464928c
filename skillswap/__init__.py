"""SkillSwap core: persistence layer and swap-request workflow."""
