"""Sentence banks for the site summary, keyed by topic.

Placeholders are filled with ``str.format``:
``{score}``, ``{errors}``, ``{issues}``, ``{warnings}``, ``{missing_alt}``,
``{images}``, ``{broken}``. Counted nouns arrive already pluralised
(``"3 images"``).
"""

TEMPLATE_BANKS: dict[str, list[str]] = {
    "score_high": [
        "The probability score is ({score}), indicating that the site has a higher probability of having issues that may require attention.",
        "The site's probability score ({score}) could suggest potential problems that need to be addressed.",
        "The site has a probability score of ({score}), indicating that there may be issues worth investigating.",
    ],
    "score_low": [
        "The probability score for the site is {score}, indicating that it could be in relatively good condition.",
        "The site's probability score is {score}, a reasonable score that suggests the site is functioning properly.",
    ],
    "mobile": [
        "The site is not mobile-friendly, which can hurt user experience and search engine ranking. Optimising for mobile devices is an important part of website design.",
        "The site is not optimised for mobile devices, which could make it harder for users to access and engage with the content.",
        "The site is not mobile-friendly, which could make it harder for users to navigate the content. Mobile optimisation is an important part of online inclusivity.",
        "The site is not mobile-friendly. A poor mobile experience tends to lower engagement, conversions and revenue, and visitors often leave sites that are not built for their phones.",
        "The site is not optimised for mobile devices, which can lead to slow loading, distorted images and other problems that users notice straight away.",
        "Our data shows the site is not mobile-friendly, which usually means a higher bounce rate and less time on site because visitors struggle to navigate on small screens.",
        "This site is not mobile-friendly, which can reduce organic traffic. Search engines prioritise mobile-friendly sites in their results.",
        "Our analysis shows the site is not optimised for mobile devices. Visitors are less likely to engage with a business whose mobile site is poor, so this directly affects conversions.",
    ],
    "keywords_found": [
        "The site has meta keywords, which can give search engines additional context about its content.",
        "Meta keywords were found on the site, which could help its search engine ranking.",
        "The site has meta keywords, which could make it easier for search engines to understand its content.",
    ],
    "keywords_missing": [
        "The site is missing meta keywords. Meta keywords give search engines additional context and can help ranking.",
        "The site does not have meta keywords, which could hurt its search engine ranking.",
        "The site is missing meta keywords, which could make it harder for search engines to understand its content.",
    ],
    "security": [
        "The site is insecure, which could make it vulnerable to attacks and erode user trust.",
        "The site is not secure, which could raise concerns for visitors and hurt search engine ranking.",
        "The site lacks proper security measures, which could leave it vulnerable to attacks and hurt user trust.",
        "The site does not have proper security protocols in place, which could expose user data to breaches.",
        "The site is not using HTTPS, which could raise concerns for visitors and hurt search engine ranking.",
        "The site's security measures are insufficient, which could leave it open to attacks and hurt its ranking.",
    ],
    "accessibility": [
        "The site has {errors} accessibility errors out of {issues} issues in total, with {warnings} warnings. Fixing them helps every visitor, including people with disabilities, use the site.",
        "There are {errors} accessibility errors on the site that need to be resolved, out of {issues} issues in total.",
        "The site has {errors} accessibility errors that need attention, with {warnings} warnings also present. Accessibility for all visitors is an important part of website design.",
        "Out of {issues} issues in total, the site has {errors} accessibility errors that need to be resolved so that all visitors can use it.",
        "The site has {errors} accessibility errors to address so that everyone, including people with disabilities, can use it effectively.",
    ],
    "missing_alt": [
        "The site has {missing_alt} without alt tags, out of {images} in total. Alt text describes images to visually impaired visitors and can help search ranking.",
        "There are {missing_alt} on the site without alt tags, which could make the content hard to follow for visually impaired visitors.",
        "Out of {images} in total, the site has {missing_alt} without alt tags, which could hurt its search ranking and user experience.",
        "The site has {missing_alt} without alt tags, which could make the content harder to understand and hurt search ranking.",
        "There are {missing_alt} on the site without alt tags. Providing alt text is an important part of accessible website design.",
    ],
    "broken_links": [
        "The site has {broken} that could hurt user experience and search engine ranking. Fixing broken links is an important part of website maintenance.",
        "There are {broken} on the site that need to be addressed. Broken links hurt search ranking and user experience.",
        "The site has {broken} that could be hurting its search ranking and user experience.",
        "Having {broken} on the site can hurt user experience and search ranking. Links should be checked and fixed regularly.",
        "The site has {broken} that could be causing problems for visitors and search engines.",
    ],
    "missing_footer": [
        "The site is missing a footer, which can make it difficult for users to find important information or navigate the site.",
        "The site does not have a footer, which could make it harder for users to find relevant content.",
        "The site lacks a footer, which could hurt user experience and engagement.",
    ],
    "outdated_footer": [
        "The site has an outdated footer, which can erode user trust.",
        "The site's footer is outdated, which could make it harder for users to trust the site.",
        "The site's footer is not up to date, which could hurt its overall impression on visitors.",
    ],
    "html_in_slug": [
        "The site has HTML in its URL slugs. URLs should be easy to read for both users and search engines.",
        "The site's URL slugs contain HTML extensions, which makes them less readable to search engines.",
        "Having HTML in the URL slug could hurt the site's search ranking and user experience.",
    ],
    "long_title": [
        "The site's title is longer than the recommended 50-70 characters, which can hurt search ranking and readability.",
        "The site's title is too long, which could make it harder for users to understand and remember.",
        "With a title that exceeds the recommended length, the site may be hurting its search ranking.",
        "The site's title is too long, which could make it harder for search engines to understand the content.",
        "A title that is too long can hurt search ranking and user experience. Shortening it is an easy win.",
    ],
    "long_description": [
        "The site's meta description is longer than the recommended 120-155 characters, which can hurt search ranking and readability.",
        "The site's meta description is too long, which could make it harder for users to engage with the search result.",
        "With a meta description that exceeds the recommended length, the site may be hurting its search ranking.",
        "The site's meta description is too long, which could make it harder for search engines to summarise the content.",
        "A meta description that is too long gets truncated in search results. Shortening it is an easy win.",
    ],
}
