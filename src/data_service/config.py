import os

GRAPHQL_URL = os.environ.get("SCORERS_GRAPHQL_URL", "http://localhost:4000/graphql")

# Seconds to wait for the data service before giving up
REQUEST_TIMEOUT = 10.0

TOP_SCORERS_QUERY = """
query GetDashboardData($competition: String!, $seasonEndYear: Int!, $limit: Int!) {
  competitions
  seasons
  topScorers(seasonEndYear: $seasonEndYear, competition: $competition, limit: $limit) {
    name
    nation
    seasonStats(seasonEndYear: $seasonEndYear, competition: $competition) {
      goals
      assists
      minutes
      xG
    }
  }
}
"""
