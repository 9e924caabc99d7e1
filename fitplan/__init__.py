"""FitPlan backend: quiz plans, progress photos, community feed, challenges."""
